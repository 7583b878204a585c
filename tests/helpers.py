from __future__ import annotations

import asyncio
from typing import Iterable, List, Sequence

from dealer.dealer import Dealer
from holdem.cards import parse_cards
from holdem.game import Game, new_game
from holdem.models import Action, GameConfig


def create_game(
    names: Sequence[str] = ("Alpha", "Beta", "Gamma"),
    *,
    starting_cash: int = 1_000,
    small_blind: int = 10,
    seed: int = 42,
    **overrides,
) -> Game:
    """Build a game with seats in the given order and no move timer."""
    config = GameConfig(
        starting_cash=starting_cash,
        small_blind=small_blind,
        draw_for_seats=False,
        move_time_ms=0,
        **overrides,
    )
    return new_game(names, config=config, seed=seed)


def create_dealer(names: Sequence[str] = ("Alpha", "Beta", "Gamma"), **kwargs) -> Dealer:
    return Dealer(create_game(names, **kwargs), asyncio.Queue())


def start_hand(dealer: Dealer) -> List[dict]:
    events = dealer.start_hand()
    assert events is not None
    return events + dealer.advance()


def stack_deck(monkeypatch, labels: Sequence[str]) -> None:
    """Make every shuffle put ``labels`` on top, in order, for the dealer to deal from."""
    top = parse_cards(labels)

    def rigged(deck, rng):
        rest = [card for card in deck if card not in top]
        deck[:] = top + rest

    monkeypatch.setattr("dealer.dealer.shuffle", rigged)


def perform_actions(dealer: Dealer, actions: Iterable[Action]) -> List[dict]:
    """Apply a scripted sequence of actions and collect the events."""
    events: List[dict] = []
    for action in actions:
        events.extend(dealer.apply(action))
    return events


def auto_complete_hand(dealer: Dealer) -> List[dict]:
    """Check or call with whoever is to act until the hand is over."""
    events: List[dict] = []
    while not dealer.game.is_hand_complete():
        events.extend(dealer.apply(Action.check_call(dealer.game.acting_player.name)))
    return events


def fold_around(dealer: Dealer) -> List[dict]:
    events: List[dict] = []
    while not dealer.game.is_hand_complete():
        events.extend(dealer.apply(Action.fold(dealer.game.acting_player.name)))
    return events
