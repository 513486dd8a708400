import typing as t

if t.TYPE_CHECKING:
    from .program import LabelKey

__all__ = (
    "format_machine_error",
    "AnteError",
    "SourceUnreadableError",
    "MachineError",
    "CharacterRangeError",
    "DivisionByZeroError",
    "UnresolvedLabelError",
    "StepLimitError"
)


def format_machine_error(line: int, pc: int, message: str) -> str:
    return f"Ante exception: {message} on line {line} (pc:{pc})"


class AnteError(Exception):
    """Base class for all Ante-related errors."""
    pass


class MachineError(AnteError):
    """Generic fatal error that happened somewhere in a running program.

    Carries the source line and program counter at the moment of failure.
    """
    def __init__(
        self,
        line: int,
        pc: int,
        message: str
    ):
        super().__init__(message)
        self.line = line
        self.pc = pc
        self.message = message

    def __str__(self) -> str:
        return format_machine_error(
            self.line,
            self.pc,
            self.message
        )


class SourceUnreadableError(MachineError):
    def __init__(self, path: str, reason: str):
        super().__init__(0, 0, f"cannot read {path!r}: {reason}")
        self.path = path


class CharacterRangeError(MachineError):
    def __init__(self, line: int, pc: int, value: int):
        super().__init__(
            line,
            pc,
            f"character code {value} is out of 0..255 range"
        )
        self.value = value


class DivisionByZeroError(MachineError):
    def __init__(self, line: int, pc: int):
        super().__init__(line, pc, "division by zero")


class UnresolvedLabelError(MachineError):
    def __init__(self, line: int, pc: int, label: 'LabelKey'):
        super().__init__(
            line,
            pc,
            f"can't find {label.describe()} to go"
        )
        self.label = label


class StepLimitError(MachineError):
    def __init__(self, line: int, pc: int, limit: int):
        super().__init__(
            line,
            pc,
            f"exceeded maximum step limit of {limit}"
        )
        self.limit = limit
