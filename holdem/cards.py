from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import List, Sequence


class Rank(IntEnum):
    ACE = 1  # high in comparisons, low in the wheel
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def high_value(self) -> int:
        return 14 if self is Rank.ACE else int(self)

    @property
    def symbol(self) -> str:
        return RANK_SYMBOLS[self]

    @property
    def title(self) -> str:
        return self.name.capitalize()


class Suit(IntEnum):
    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3
    SPADES = 4

    @property
    def symbol(self) -> str:
        return self.name[0]

    @property
    def title(self) -> str:
        return self.name.capitalize()


RANK_SYMBOLS = {rank: symbol for rank, symbol in zip(Rank, "A23456789TJQK")}
RANKS = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}
SUITS = {suit.symbol: suit for suit in Suit}

_RANK_NAMES = {
    "ace": Rank.ACE, "a": Rank.ACE,
    "two": Rank.TWO, "2": Rank.TWO,
    "three": Rank.THREE, "3": Rank.THREE,
    "four": Rank.FOUR, "4": Rank.FOUR,
    "five": Rank.FIVE, "5": Rank.FIVE,
    "six": Rank.SIX, "6": Rank.SIX,
    "seven": Rank.SEVEN, "7": Rank.SEVEN,
    "eight": Rank.EIGHT, "8": Rank.EIGHT,
    "nine": Rank.NINE, "9": Rank.NINE,
    "ten": Rank.TEN, "t": Rank.TEN, "10": Rank.TEN,
    "jack": Rank.JACK, "j": Rank.JACK,
    "queen": Rank.QUEEN, "q": Rank.QUEEN,
    "king": Rank.KING, "k": Rank.KING,
}
_SUIT_NAMES = {
    "clubs": Suit.CLUBS, "c": Suit.CLUBS,
    "diamonds": Suit.DIAMONDS, "d": Suit.DIAMONDS,
    "hearts": Suit.HEARTS, "h": Suit.HEARTS,
    "spades": Suit.SPADES, "s": Suit.SPADES,
}


@total_ordering
@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit!r}")

    @property
    def label(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __lt__(self, other: object) -> bool:
        # Aces sort above kings; suits break rank ties.
        if not isinstance(other, Card):
            return NotImplemented
        return (self.rank.high_value, self.suit) < (other.rank.high_value, other.suit)

    def __str__(self) -> str:
        return f"{self.rank.title} of {self.suit.title}"


def new_deck() -> List[Card]:
    """Return the 52 cards in canonical order: every rank of clubs, then diamonds, hearts, spades."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(deck: List[Card], rng: random.Random) -> None:
    rng.shuffle(deck)


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label!r}")
    rank = RANKS.get(label[0])
    if rank is None:
        raise ValueError(f"Invalid rank: {label[0]!r}")
    suit = SUITS.get(label[1])
    if suit is None:
        raise ValueError(f"Invalid suit: {label[1]!r}")
    return Card(rank, suit)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def card_from_name(name: str) -> Card:
    """Parse a formal card name such as "Ace of Clubs" or "10 of hearts"."""
    raw_rank, sep, raw_suit = name.strip().partition(" of ")
    if not sep:
        raise ValueError(f"Invalid card name: {name!r}")
    rank = _RANK_NAMES.get(raw_rank.strip().lower())
    if rank is None:
        raise ValueError(f"Invalid rank: {raw_rank!r}")
    suit = _SUIT_NAMES.get(raw_suit.strip().lower())
    if suit is None:
        raise ValueError(f"Invalid suit: {raw_suit!r}")
    return Card(rank, suit)


def card_from_string(text: str) -> Card:
    if len(text) == 2:
        return parse_label(text)
    return card_from_name(text)
