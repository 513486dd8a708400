#
# Assignment statements: fold a run of operand cards into one register.
#
import logging
import operator
import typing as t

from . import errors
from .cards import ACE, Card, Suit
from .machine import MachineState

__all__ = (
    "OPERATORS",
    "truncdiv",
    "card_value",
    "evaluate",
    "assign"
)

logger = logging.getLogger(__name__)

BinaryOpT = t.Callable[[int, int], int]


def truncdiv(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


OPERATORS: t.Mapping[Suit, BinaryOpT] = {
    Suit.DIAMONDS: operator.add,
    Suit.HEARTS: operator.mul,
    Suit.SPADES: operator.sub,
    Suit.CLUBS: truncdiv
}


def card_value(state: MachineState, card: Card) -> int:
    if card.rank == ACE:
        return state.get_register(card.register)

    return t.cast(int, card.rank)


def evaluate(state: MachineState, operands: t.Sequence[Card]) -> int:
    first, *rest = operands
    result = card_value(state, first)

    for card in rest:
        value = card_value(state, card)
        if card.register is Suit.CLUBS and value == 0:
            raise errors.DivisionByZeroError(state.line, state.pc)

        result = OPERATORS[card.register](result, value)

    return result


def assign(state: MachineState, operands: t.Sequence[Card]) -> None:
    """Evaluate a statement and store it in the first operand's register."""
    logger.debug(f"assign: {' '.join(str(card) for card in operands)}")
    state.set_register(operands[0].register, evaluate(state, operands))
