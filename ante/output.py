import logging
import typing as t

from . import errors
from .cards import Suit
from .machine import MachineState

__all__ = (
    "dump_decimal",
    "dump_char",
    "take_character"
)

logger = logging.getLogger(__name__)

INCOMPLETE = "unexpected end of data"


def dump_decimal(state: MachineState, suit: Suit, stream: t.TextIO) -> None:
    stream.write(str(state.get_register(suit)))


def take_character(pending: bytearray) -> t.Optional[str]:
    """
    Return the character held in `pending` and clear it, or None if the
    bytes are only the start of a longer UTF-8 sequence.

    Invalid sequences come out as U+FFFD.
    """
    try:
        char = pending.decode("utf-8")
    except UnicodeDecodeError as e:
        if e.reason == INCOMPLETE:
            return None

        char = pending.decode("utf-8", errors="replace")

    pending.clear()
    return char


def dump_char(state: MachineState, suit: Suit, stream: t.TextIO) -> None:
    value = state.get_register(suit)
    if not 0 <= value <= 255:
        raise errors.CharacterRangeError(state.line, state.pc, value)

    state.pending.append(value)
    char = take_character(state.pending)

    if char is None:
        logger.debug(f"dump_char: pending {bytes(state.pending)!r}")
    else:
        stream.write(char)
