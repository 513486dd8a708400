import dataclasses
import enum
import logging
import re
import typing as t

from . import errors

__all__ = (
    "Card",
    "CardStateError",
    "RankT",
    "Suit",
    "Tokenizer",
    "JACK",
    "QUEEN",
    "KING",
    "ACE",
    "TEN"
)

logger = logging.getLogger(__name__)

COMMENT = "#"
JACK = "J"
QUEEN = "Q"
KING = "K"
ACE = "A"
TEN = 10
CONTROL_RANKS = (JACK, QUEEN, KING)

# Raw ranks are the matched text. After label resolution numeric ranks are ints.
RankT = t.Union[int, str]


class Suit(enum.Enum):
    DIAMONDS = "♦"
    HEARTS = "♥"
    SPADES = "♠"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


# "10" comes first so the two character rank wins over a lone digit.
CARD_PATTERN = re.compile(
    r"(10|[2-9JQKA])([" + "".join(suit.value for suit in Suit) + r"])"
)


class CardStateError(errors.AnteError):
    """Raised when a card is used in a way its kind does not allow.

    Internal to the ante module. If one of these makes it out, something
    is probably wrong with the interpreter.
    """
    def __init__(self, card: 'Card', message: str):
        super().__init__(message)
        self.card = card
        self.message = message

    def __str__(self) -> str:
        return self.message


@dataclasses.dataclass(frozen=True)
class Card:
    rank: t.Optional[RankT]
    suit: t.Optional[Suit]
    line: int

    @classmethod
    def marker(cls, line: int) -> 'Card':
        """Pseudo-card emitted at the start of every source line."""
        return cls(None, None, line)

    @property
    def register(self) -> Suit:
        if self.suit is None:
            raise CardStateError(self, "line markers do not name a register")

        return self.suit

    def is_marker(self) -> bool:
        return self.rank is None

    def is_control(self) -> bool:
        return self.rank in CONTROL_RANKS

    def is_operand(self) -> bool:
        return not self.is_marker() and not self.is_control()

    def to_dict(self) -> t.Mapping[str, t.Any]:
        return {
            "rank": self.rank,
            "suit": None if self.suit is None else self.suit.value,
            "line": self.line
        }

    def __str__(self) -> str:
        if self.is_marker():
            return f"<line {self.line}>"

        return f"{self.rank}{self.suit}"


class Tokenizer:
    def __init__(self, string: str):
        self.string = string
        self.current_line = 0

    @staticmethod
    def clean_line(line: str) -> str:
        """Drop a trailing comment and surrounding whitespace."""
        comment = line.find(COMMENT)
        if comment != -1:
            line = line[:comment]

        return line.strip()

    def tokenize_line(self, line: str) -> t.Sequence[Card]:
        self.current_line += 1
        cards = [Card.marker(self.current_line)]

        for match in CARD_PATTERN.finditer(self.clean_line(line)):
            card = Card(match.group(1), Suit(match.group(2)), self.current_line)
            logger.debug(f"tokenize: Got card {card} on line {self.current_line}")
            cards.append(card)

        return cards

    def get_all_cards(self) -> t.Sequence[Card]:
        self.current_line = 0
        cards: t.MutableSequence[Card] = []

        for line in self.string.split("\n"):
            cards.extend(self.tokenize_line(line))

        return cards
