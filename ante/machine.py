import dataclasses
import logging
import typing as t

from .cards import Suit

__all__ = (
    "MachineState",
    "new_registers"
)

logger = logging.getLogger(__name__)


def new_registers() -> t.MutableMapping[Suit, int]:
    return {suit: 0 for suit in Suit}


@dataclasses.dataclass
class MachineState:
    """
    Everything a running program can change: the four registers, the
    program counter, the current source line and the bytes of a
    character still being assembled.
    """
    pc: int = 0
    line: int = 0
    registers: t.MutableMapping[Suit, int] = dataclasses.field(default_factory=new_registers)
    pending: bytearray = dataclasses.field(default_factory=bytearray)
    steps: int = 0

    def get_register(self, suit: Suit) -> int:
        return self.registers[suit]

    def set_register(self, suit: Suit, value: int) -> None:
        logger.debug(f"set_register: {suit} = {value}")
        self.registers[suit] = value

    def dump_registers(self) -> None:
        for suit, value in self.registers.items():
            logger.debug(f"  {suit}: {value}")
