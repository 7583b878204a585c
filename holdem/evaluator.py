from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Dict, List, Optional, Sequence

from .cards import Card, Rank, Suit


class HandKind(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def title(self) -> str:
        return _KIND_TITLES[self]


_KIND_TITLES = {
    HandKind.HIGH_CARD: "High Card",
    HandKind.PAIR: "Pair",
    HandKind.TWO_PAIR: "Two Pair",
    HandKind.THREE_OF_A_KIND: "Three of a Kind",
    HandKind.STRAIGHT: "Straight",
    HandKind.FLUSH: "Flush",
    HandKind.FULL_HOUSE: "Full House",
    HandKind.FOUR_OF_A_KIND: "Four of a Kind",
    HandKind.STRAIGHT_FLUSH: "Straight Flush",
}

# Kinds whose second rank takes part in comparisons.
_TWO_RANK_KINDS = (HandKind.TWO_PAIR, HandKind.FULL_HOUSE)

# Ranks from lowest to highest with the ace on top.
_ASCENDING = sorted(Rank, key=lambda rank: rank.high_value)
_ROYAL = (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN)


@total_ordering
@dataclass(frozen=True)
class Hand:
    """Category of a best five-card hand plus the ranks that decide ties.

    ``high`` is the defining rank (top of a straight, the trips of a full house,
    the higher pair of two pair). ``low`` is kept only for two pair and full
    house; remaining kickers are not modelled, so such hands compare equal.
    """

    kind: HandKind
    high: Rank
    low: Optional[Rank] = None

    def __post_init__(self) -> None:
        if self.kind not in _TWO_RANK_KINDS and self.low is not None:
            object.__setattr__(self, "low", None)

    def _key(self) -> tuple:
        low = self.low.high_value if self.low is not None else 0
        return (int(self.kind), self.high.high_value, low)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._key() < other._key()

    def less(self, other: Hand) -> bool:
        return self < other

    def greater(self, other: Hand) -> bool:
        return other < self

    def __str__(self) -> str:
        if self.kind in _TWO_RANK_KINDS:
            assert self.low is not None
            return f"{self.kind.title} ({self.high.title}, {self.low.title})"
        if self.kind in (HandKind.STRAIGHT, HandKind.FLUSH, HandKind.STRAIGHT_FLUSH):
            return f"{self.kind.title} ({self.high.title} high)"
        return f"{self.kind.title} ({self.high.title})"


def evaluate_hand(hole: Sequence[Card], community: Sequence[Card]) -> Hand:
    """Best hand from two hole cards and five community cards."""
    return evaluate_seven(list(hole) + list(community))


def evaluate_seven(cards: Sequence[Card]) -> Hand:
    if len(cards) != 7:
        raise ValueError(f"Expected 7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    rank_counts = [0] * (len(Rank) + 1)
    suit_counts = [0] * (len(Suit) + 1)
    for card in cards:
        rank_counts[card.rank] += 1
        suit_counts[card.suit] += 1

    flush_suit = next((suit for suit in Suit if suit_counts[suit] >= 5), None)
    straight = _straight_high(rank_counts)

    if flush_suit is not None:
        flush_counts = [0] * (len(Rank) + 1)
        for card in cards:
            if card.suit == flush_suit:
                flush_counts[card.rank] += 1
        straight_flush = _straight_high(flush_counts)
        if straight_flush is not None:
            return Hand(HandKind.STRAIGHT_FLUSH, straight_flush)

    quads: List[Rank] = []
    trips: List[Rank] = []
    pairs: List[Rank] = []
    high = None
    for rank in _ASCENDING:
        count = rank_counts[rank]
        if count == 4:
            quads.append(rank)
        elif count == 3:
            trips.append(rank)
        elif count == 2:
            pairs.append(rank)
        if count:
            high = rank
    assert high is not None

    if quads:
        return Hand(HandKind.FOUR_OF_A_KIND, quads[-1])

    # A lower set of trips can only ever play as the pair of a full house.
    full_pairs = sorted(pairs + trips[:-1], key=lambda rank: rank.high_value)
    if trips and full_pairs:
        return Hand(HandKind.FULL_HOUSE, trips[-1], full_pairs[-1])
    if flush_suit is not None:
        flush_high = max(
            (card.rank for card in cards if card.suit == flush_suit),
            key=lambda rank: rank.high_value,
        )
        return Hand(HandKind.FLUSH, flush_high)
    if straight is not None:
        return Hand(HandKind.STRAIGHT, straight)
    if trips:
        return Hand(HandKind.THREE_OF_A_KIND, trips[-1])
    if len(pairs) >= 2:
        return Hand(HandKind.TWO_PAIR, pairs[-1], pairs[-2])
    if pairs:
        return Hand(HandKind.PAIR, pairs[-1])
    return Hand(HandKind.HIGH_CARD, high)


def _straight_high(counts: Sequence[int]) -> Optional[Rank]:
    # Ace is index 1, so the window ending at Five already covers the wheel;
    # the royal straight wraps past King and needs its own check.
    if all(counts[rank] for rank in _ROYAL):
        return Rank.ACE
    for top in range(Rank.KING, Rank.FIVE - 1, -1):
        if all(counts[top - offset] for offset in range(5)):
            return Rank(top)
    return None


def evaluate_best(cards: Sequence[Card]) -> Hand:
    """Best hand over every five-card subset of 5 to 7 cards."""
    if not 5 <= len(cards) <= 7:
        raise ValueError(f"Expected 5 to 7 cards, got {len(cards)}")
    best: Optional[Hand] = None
    for combo in itertools.combinations(cards, 5):
        hand = evaluate_five(combo)
        if best is None or hand > best:
            best = hand
    assert best is not None
    return best


def evaluate_five(cards: Sequence[Card]) -> Hand:
    if len(cards) != 5:
        raise ValueError(f"Expected 5 cards, got {len(cards)}")
    values = sorted((card.rank.high_value for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    straight_high = _five_card_straight(values)

    counts: Dict[int, int] = {}
    for value in values:
        counts.setdefault(value, 0)
        counts[value] += 1
    ordered = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    count_values = [count for _, count in ordered]

    if straight_high and is_flush:
        return Hand(HandKind.STRAIGHT_FLUSH, _rank_of(straight_high))
    if count_values[0] == 4:
        return Hand(HandKind.FOUR_OF_A_KIND, _rank_of(ordered[0][0]))
    if count_values[0] == 3 and count_values[1] == 2:
        return Hand(HandKind.FULL_HOUSE, _rank_of(ordered[0][0]), _rank_of(ordered[1][0]))
    if is_flush:
        return Hand(HandKind.FLUSH, _rank_of(values[0]))
    if straight_high:
        return Hand(HandKind.STRAIGHT, _rank_of(straight_high))
    if count_values[0] == 3:
        return Hand(HandKind.THREE_OF_A_KIND, _rank_of(ordered[0][0]))
    if count_values[0] == 2 and count_values[1] == 2:
        return Hand(HandKind.TWO_PAIR, _rank_of(ordered[0][0]), _rank_of(ordered[1][0]))
    if count_values[0] == 2:
        return Hand(HandKind.PAIR, _rank_of(ordered[0][0]))
    return Hand(HandKind.HIGH_CARD, _rank_of(values[0]))


def _five_card_straight(values: List[int]) -> Optional[int]:
    distinct = set(values)
    if len(distinct) != 5:
        return None
    if max(distinct) - min(distinct) == 4:
        return max(distinct)
    if distinct == {14, 5, 4, 3, 2}:  # wheel
        return 5
    return None


def _rank_of(value: int) -> Rank:
    return Rank.ACE if value == 14 else Rank(value)
