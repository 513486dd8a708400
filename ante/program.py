"""
Label resolution: turns the raw card stream into an executable `Program`.
"""

import dataclasses
import json
import logging
import types
import typing as t

from .cards import QUEEN, Card, RankT, Suit, Tokenizer

__all__ = (
    "LabelKey",
    "Program",
    "normalize_rank",
    "normalize_card",
    "find_statement_spans",
    "resolve",
    "parse"
)

logger = logging.getLogger(__name__)


class LabelKey(t.NamedTuple):
    """A jump target, identified by the suit and length of a Queen run."""
    suit: Suit
    arity: int

    def describe(self) -> str:
        return f"{QUEEN}{self.suit}" * self.arity


@dataclasses.dataclass(frozen=True)
class Program:
    cards: t.Sequence[Card]
    labels: t.Mapping[LabelKey, int]
    spans: t.Mapping[int, int]

    def __len__(self) -> int:
        return len(self.cards)

    def to_dict(self) -> t.Mapping[str, t.Any]:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "labels": {key.describe(): index for key, index in self.labels.items()},
            "spans": {str(start): end for start, end in self.spans.items()}
        }

    def prettify(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=4)


def normalize_rank(rank: t.Optional[RankT]) -> t.Optional[RankT]:
    if isinstance(rank, str) and rank.isdigit():
        return int(rank)

    return rank


def normalize_card(card: Card) -> Card:
    rank = normalize_rank(card.rank)
    if rank is card.rank:
        return card

    return dataclasses.replace(card, rank=rank)


def find_statement_spans(cards: t.Sequence[Card]) -> t.Mapping[int, int]:
    """
    Map the index of every operand card to the end (exclusive) of the
    assignment statement that would start there.
    """
    spans: t.MutableMapping[int, int] = {}
    end = len(cards)

    for i in range(len(cards) - 1, -1, -1):
        if cards[i].is_operand():
            spans[i] = end
        else:
            end = i

    return types.MappingProxyType(spans)


def resolve(cards: t.Sequence[Card]) -> Program:
    normalized: t.MutableSequence[Card] = []
    labels: t.MutableMapping[LabelKey, int] = {}
    i = 0

    while i < len(cards):
        card = cards[i]

        if card.rank != QUEEN:
            normalized.append(normalize_card(card))
            i += 1
            continue

        run = 1
        while (
            i + run < len(cards) and
            cards[i + run].rank == QUEEN and
            cards[i + run].suit == card.suit
        ):
            run += 1

        normalized.extend(cards[i:i + run])
        i += run

        key = LabelKey(card.register, run)
        if key in labels:
            logger.debug(f"resolve: {key.describe()} redefined, {labels[key]} -> {i}")
        else:
            logger.debug(f"resolve: {key.describe()} -> {i}")

        labels[key] = i

    return Program(
        tuple(normalized),
        types.MappingProxyType(labels),
        find_statement_spans(normalized)
    )


def parse(script: str) -> Program:
    return resolve(Tokenizer(script).get_all_cards())
