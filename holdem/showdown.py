from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .cards import cards_to_labels
from .evaluator import Hand, evaluate_hand
from .game import Game
from .models import RemainderPolicy, Round

LOGGER = logging.getLogger("holdem.showdown")


def resolve_pot(game: Game) -> List[Dict[str, object]]:
    """Award the pot to the best hand(s) among players who have not folded.

    Tied winners share the pot by integer division. The odd chips go to the house
    or to the first winner left of the button, depending on the configured policy.
    """
    live = game.live_indices()
    if not live:
        raise RuntimeError("No players left to award the pot to")

    events: List[Dict[str, object]] = []
    game.round = Round.SHOWDOWN
    game.pending.clear()
    LOGGER.debug("resolving hand... %d players left", len(live))

    if len(live) == 1:
        _award(game, live[0], game.pot, events, shares=1)
    else:
        if len(game.community) != 5:
            raise RuntimeError("Showdown requires five community cards")
        hands = _reset_buffer(game)
        best: Optional[Hand] = None
        board = cards_to_labels(game.community)
        for seat_idx in live:
            seat = game.players[seat_idx]
            hand = evaluate_hand(seat.hole_cards, game.community)
            hands[seat_idx] = hand
            events.append(
                {
                    "ev": "SHOWDOWN",
                    "player": seat.name,
                    "hole": cards_to_labels(seat.hole_cards),
                    "board": board,
                    "rank": hand.kind.name.lower(),
                    "hand": str(hand),
                }
            )
            if best is None or hand > best:
                best = hand

        winners = [seat_idx for seat_idx in live if hands[seat_idx] == best]
        if not winners:
            raise RuntimeError("no one won: this should never happen")

        share, remainder = divmod(game.pot, len(winners))
        for seat_idx in winners:
            _award(game, seat_idx, share, events, shares=len(winners))
        if remainder:
            if game.config.remainder_policy == RemainderPolicy.BUTTON:
                lucky = game.next_index(game.button_index, lambda idx, _: idx in winners)
                assert lucky is not None
                _award(game, lucky, remainder, events, shares=len(winners))
            else:
                game.pot -= remainder
                game.house += remainder
                LOGGER.info("house takes the remainder %d", remainder)
                events.append({"ev": "HOUSE_TAKE", "amount": remainder})

    if game.pot != 0:
        raise RuntimeError(f"Pot not empty after showdown: {game.pot}")
    game.current_bet = 0
    for seat in game.players:
        seat.bet_this_round = 0
        seat.total_in_pot = 0
    return events


def _award(game: Game, seat_idx: int, amount: int, events: List[Dict[str, object]], shares: int) -> None:
    seat = game.players[seat_idx]
    seat.cash += amount
    game.pot -= amount
    if shares > 1:
        LOGGER.info("player %s takes a 1/%d share of the pot worth %d", seat.name, shares, amount)
    else:
        LOGGER.info("player %s takes a pot worth %d", seat.name, amount)
    events.append({"ev": "POT_AWARD", "player": seat.name, "amount": amount})


def _reset_buffer(game: Game) -> List[Optional[Hand]]:
    hands = game.hands
    if len(hands) < len(game.players):
        hands.extend([None] * (len(game.players) - len(hands)))
    for idx in range(len(hands)):
        hands[idx] = None
    return hands
