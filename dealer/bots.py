from __future__ import annotations

import asyncio
import random
from typing import Callable, Dict, Mapping, Optional, Sequence

from holdem.models import Action, Round, Snapshot

from .dealer import Dealer

Strategy = Callable[[Dict[str, object], Snapshot, random.Random], Action]

_RANK_POINTS = {rank: idx for idx, rank in enumerate("23456789TJQKA", start=2)}


def _rough_hand_strength(hole: Sequence[str]) -> int:
    """Very rough proxy for hand quality used to drive aggression choices."""
    if len(hole) < 2:
        return 0

    ranks = [card[0] for card in hole]
    suits = [card[1] for card in hole]
    values = [_RANK_POINTS.get(rank, 2) for rank in ranks]

    score = sum(values)
    if ranks[0] == ranks[1]:
        score += 14  # pairs are quite strong pre-flop
    else:
        gap = abs(values[0] - values[1])
        if gap == 1:
            score += 4
        elif gap == 2:
            score += 2
    if suits[0] == suits[1]:
        score += 3
    if min(values) >= 11:
        score += 2

    return score


def _should_raise(strength: int, street: Round, facing_bet: bool, rng: random.Random) -> bool:
    base = 0.2 if facing_bet else 0.35
    street_bonus = {
        Round.PRE_FLOP: 0.0,
        Round.FLOP: 0.05,
        Round.TURN: 0.1,
        Round.RIVER: 0.12,
    }.get(street, 0.0)
    scaled_strength = min(strength / 45.0, 0.45)
    probability = min(0.85, base + street_bonus + scaled_strength)

    # Always attack with premium holdings.
    if strength >= 36:
        return True
    return rng.random() < probability


def _choose_raise_amount(min_raise_to: int, max_raise_to: int, facing_bet: bool, rng: random.Random) -> int:
    if max_raise_to <= min_raise_to:
        return min_raise_to

    span = max_raise_to - min_raise_to
    roll = rng.random()

    # Facing a bet → weight toward stronger responses, otherwise mix in more probes.
    if facing_bet:
        if roll < 0.2:
            return min_raise_to
        if roll > 0.85:
            return max_raise_to
    else:
        if roll < 0.35:
            return min_raise_to
        if roll > 0.9:
            return max_raise_to

    return min_raise_to + int(span * rng.random())


def passive_strategy(prompt: Dict[str, object], snapshot: Snapshot, rng: random.Random) -> Action:
    """Check or call every time."""
    return Action.check_call(str(prompt["player"]))


def baseline_strategy(prompt: Dict[str, object], snapshot: Snapshot, rng: random.Random) -> Action:
    """Aggressive demo bot: mixes in random raises with a bias toward stronger holdings."""
    name = str(prompt["player"])
    view = snapshot.player(name)
    to_call = int(prompt["to_call"])  # type: ignore[arg-type]
    min_raise = int(prompt["min_raise_to"])  # type: ignore[arg-type]
    max_raise = int(prompt["max_raise_to"])  # type: ignore[arg-type]
    strength = _rough_hand_strength(view.hole_cards)
    facing_bet = to_call > 0

    if max_raise > min_raise and _should_raise(strength, snapshot.round, facing_bet, rng):
        amount = _choose_raise_amount(min_raise, max_raise, facing_bet, rng)
        if amount >= max_raise:
            return Action.all_in(name)
        return Action.raise_to(name, amount)

    # Junk facing a bet larger than a quarter of the stack gets thrown away.
    if facing_bet and strength < 20 and to_call * 4 > view.cash:
        return Action.fold(name)
    return Action.check_call(name)


STRATEGIES: Dict[str, Strategy] = {
    "passive": passive_strategy,
    "baseline": baseline_strategy,
}


class BotTable:
    """Answers the dealer's ACT prompts for the players it controls."""

    def __init__(
        self,
        actions: "asyncio.Queue[Optional[Action]]",
        strategies: Mapping[str, Strategy],
        rng: Optional[random.Random] = None,
    ) -> None:
        self.actions = actions
        self.strategies = dict(strategies)
        self.rng = rng or random.Random()

    def attach(self, dealer: Dealer) -> None:
        dealer.subscribe(self.on_event)

    def on_event(self, event: Dict[str, object], snapshot: Snapshot) -> None:
        if event.get("ev") != "ACT":
            return
        strategy = self.strategies.get(str(event["player"]))
        if strategy is None:
            return
        self.actions.put_nowait(strategy(event, snapshot, self.rng))
