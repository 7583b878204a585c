from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .cards import Card


class Round(str, Enum):
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"


class ActionType(str, Enum):
    FOLD = "FOLD"
    CHECK_CALL = "CHECK_CALL"
    RAISE = "RAISE"
    ALLIN = "ALLIN"


class RemainderPolicy(str, Enum):
    HOUSE = "HOUSE"
    BUTTON = "BUTTON"


@dataclass(frozen=True)
class Action:
    """One player decision; ``amount`` is the raise-to total and exists only for RAISE."""

    player: str
    kind: ActionType
    amount: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ActionType):
            raise ValueError(f"Unsupported action {self.kind!r}")
        if self.kind == ActionType.RAISE:
            if not isinstance(self.amount, int) or isinstance(self.amount, bool):
                raise ValueError("Raise requires amount")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.value} does not take an amount")

    @classmethod
    def fold(cls, player: str) -> Action:
        return cls(player, ActionType.FOLD)

    @classmethod
    def check_call(cls, player: str) -> Action:
        return cls(player, ActionType.CHECK_CALL)

    @classmethod
    def raise_to(cls, player: str, amount: int) -> Action:
        return cls(player, ActionType.RAISE, amount)

    @classmethod
    def all_in(cls, player: str) -> Action:
        return cls(player, ActionType.ALLIN)


@dataclass
class GameConfig:
    starting_cash: int = 1_000
    small_blind: int = 10
    blind_increase_every: int = 10
    blind_increase_by: int = 10
    move_time_ms: int = 15_000
    remainder_policy: RemainderPolicy = RemainderPolicy.HOUSE
    draw_for_seats: bool = True
    max_hands: Optional[int] = None


@dataclass
class Player:
    name: str
    cash: int
    hole_cards: List[Card] = field(default_factory=list)
    folded: bool = False
    bet_this_round: int = 0
    all_in: bool = False
    total_in_pot: int = 0

    @property
    def can_act(self) -> bool:
        return not self.folded and not self.all_in

    def reset_for_hand(self) -> None:
        self.hole_cards.clear()
        self.folded = False
        self.bet_this_round = 0
        self.all_in = False
        self.total_in_pot = 0

    def reset_for_round(self) -> None:
        self.bet_this_round = 0


@dataclass(frozen=True)
class PlayerView:
    name: str
    cash: int
    bet_this_round: int
    folded: bool
    all_in: bool
    hole_cards: Tuple[str, ...]


@dataclass(frozen=True)
class Snapshot:
    hand_number: int
    round: Round
    pot: int
    house: int
    current_bet: int
    small_blind: int
    position: Optional[str]
    community: Tuple[str, ...]
    players: Tuple[PlayerView, ...]

    def player(self, name: str) -> PlayerView:
        for view in self.players:
            if view.name == name:
                return view
        raise KeyError(name)


@dataclass
class HandResult:
    hand_number: int
    payouts: List[Tuple[str, int]] = field(default_factory=list)
    house_take: int = 0
    eliminated: List[str] = field(default_factory=list)


@dataclass
class MatchResult:
    winner: Optional[str]
    hands_played: int
    stacks: List[Tuple[str, int]] = field(default_factory=list)
    aborted: bool = False
