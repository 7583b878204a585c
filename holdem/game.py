from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

from .cards import Card, cards_to_labels, new_deck
from .evaluator import Hand
from .models import GameConfig, Player, PlayerView, Round, Snapshot

# Game holds all table state in memory. Only the dealer task mutates it;
# observers get frozen Snapshot copies.

MAX_PLAYERS = 10


@dataclass
class Game:
    players: List[Player]
    config: GameConfig
    rng: random.Random
    small_blind: int
    deck: List[Card] = field(default_factory=new_deck)
    community: List[Card] = field(default_factory=list)
    round: Round = Round.SHOWDOWN  # no hand in progress yet
    position: int = 0
    blind_index: int = -1  # seat of the small blind; -1 before the first hand
    current_bet: int = 0
    pot: int = 0
    house: int = 0
    hand_number: int = 0
    pending: Set[int] = field(default_factory=set)
    eliminated: List[Player] = field(default_factory=list)
    # Showdown scratch space, one slot per seat, reused between hands.
    hands: List[Optional[Hand]] = field(default_factory=list)

    @property
    def big_blind(self) -> int:
        return 2 * self.small_blind

    @property
    def in_hand(self) -> bool:
        return self.round != Round.SHOWDOWN

    def is_hand_complete(self) -> bool:
        return self.round == Round.SHOWDOWN and self.pot == 0

    @property
    def acting_player(self) -> Player:
        return self.players[self.position]

    @property
    def button_index(self) -> int:
        # Heads-up the small blind is on the button.
        if len(self.players) == 2:
            return self.blind_index
        return (self.blind_index - 1) % len(self.players)

    def index_of(self, name: str) -> int:
        for idx, player in enumerate(self.players):
            if player.name == name:
                return idx
        raise ValueError(f"Unknown player {name!r}")

    def live_indices(self) -> List[int]:
        return [idx for idx, player in enumerate(self.players) if not player.folded]

    def actionable_indices(self) -> List[int]:
        return [idx for idx, player in enumerate(self.players) if player.can_act]

    def first_index_from(self, start: int, predicate: Callable[[int, Player], bool]) -> Optional[int]:
        """Walk the table clockwise from ``start`` (inclusive) and return the first match."""
        count = len(self.players)
        for step in range(count):
            idx = (start + step) % count
            if predicate(idx, self.players[idx]):
                return idx
        return None

    def next_index(self, after: int, predicate: Callable[[int, Player], bool]) -> Optional[int]:
        return self.first_index_from(after + 1, predicate)

    def total_chips(self) -> int:
        table = sum(player.cash for player in self.players)
        gone = sum(player.cash for player in self.eliminated)
        return table + gone + self.pot + self.house

    def snapshot(self) -> Snapshot:
        position = None
        if self.in_hand and self.pending and 0 <= self.position < len(self.players):
            position = self.players[self.position].name
        return Snapshot(
            hand_number=self.hand_number,
            round=self.round,
            pot=self.pot,
            house=self.house,
            current_bet=self.current_bet,
            small_blind=self.small_blind,
            position=position,
            community=tuple(cards_to_labels(self.community)),
            players=tuple(
                PlayerView(
                    name=player.name,
                    cash=player.cash,
                    bet_this_round=player.bet_this_round,
                    folded=player.folded,
                    all_in=player.all_in,
                    hole_cards=tuple(cards_to_labels(player.hole_cards)),
                )
                for player in self.players
            ),
        )


def new_game(
    names: Sequence[str],
    small_blind: Optional[int] = None,
    *,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Game:
    config = config or GameConfig()
    if small_blind is None:
        small_blind = config.small_blind
    if small_blind <= 0:
        raise ValueError("Small blind must be positive")
    if len(names) < 2:
        raise ValueError("At least two players are required")
    if len(names) > MAX_PLAYERS:
        raise ValueError(f"At most {MAX_PLAYERS} players can sit at a table")

    cleaned = [name.strip() for name in names]
    if any(not name for name in cleaned):
        raise ValueError("Player names must not be empty")
    if len({name.casefold() for name in cleaned}) != len(cleaned):
        raise ValueError("Player names must be unique")

    rng = rng or random.Random(seed)
    players = [Player(name=name, cash=config.starting_cash) for name in cleaned]
    if config.draw_for_seats:
        rng.shuffle(players)

    return Game(
        players=players,
        config=config,
        rng=rng,
        small_blind=small_blind,
        hands=[None] * len(players),
    )
