from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .cards import cards_to_labels, deal
from .game import Game
from .models import ActionType, Player, Round

LOGGER = logging.getLogger("holdem.betting")

# Cards revealed when leaving each street.
_REVEALS = {
    Round.PRE_FLOP: (Round.FLOP, 3),
    Round.FLOP: (Round.TURN, 1),
    Round.TURN: (Round.RIVER, 1),
}


class OutOfTurnError(ValueError):
    pass


def min_raise_to(game: Game) -> int:
    """Smallest legal raise-to total: double the current bet, never below the big blind."""
    return max(2 * game.current_bet, game.big_blind)


def take_action(
    game: Game,
    player: str,
    action: ActionType,
    amount: Optional[int] = None,
) -> List[Dict[str, object]]:
    """Validate and apply one action for the player at ``game.position``.

    Raises ``ValueError`` (``OutOfTurnError`` for turn order) without touching the
    game when the action is illegal. Calls and raises the player cannot cover turn
    into an all-in. ``game.position`` is left alone; see ``advance_position``.
    """
    if not game.in_hand:
        raise RuntimeError("Hand not active")
    seat_idx = game.position
    seat = game.players[seat_idx]
    if player != seat.name:
        raise OutOfTurnError(f"It is not {player!r}'s turn")
    if action != ActionType.RAISE and amount is not None:
        raise ValueError(f"{action} does not take an amount")

    previous_bet = game.current_bet
    events: List[Dict[str, object]] = []

    if action == ActionType.FOLD:
        seat.folded = True
        LOGGER.info("player %s folds", seat.name)
        events.append({"ev": "FOLD", "player": seat.name})
    elif action == ActionType.CHECK_CALL:
        needed = game.current_bet - seat.bet_this_round
        if needed > seat.cash:
            return take_action(game, player, ActionType.ALLIN)
        _commit_chips(game, seat, needed)
        if needed == 0:
            LOGGER.info("player %s checks", seat.name)
            events.append({"ev": "CHECK", "player": seat.name})
        else:
            LOGGER.info("player %s calls %d", seat.name, needed)
            events.append({"ev": "CALL", "player": seat.name, "amount": needed})
    elif action == ActionType.RAISE:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise ValueError("Raise requires amount")
        if game.current_bet - seat.bet_this_round >= seat.cash:
            return take_action(game, player, ActionType.ALLIN)
        minimum = min_raise_to(game)
        if amount < minimum:
            raise ValueError(f"Raise to {amount} is below the minimum of {minimum}")
        additional = amount - seat.bet_this_round
        if additional >= seat.cash:
            return take_action(game, player, ActionType.ALLIN)
        _commit_chips(game, seat, additional)
        game.current_bet = amount
        LOGGER.info("player %s raises to %d", seat.name, amount)
        events.append({"ev": "RAISE", "player": seat.name, "amount": amount})
    elif action == ActionType.ALLIN:
        shove = seat.cash
        _commit_chips(game, seat, shove)
        seat.all_in = True
        game.current_bet = max(game.current_bet, seat.bet_this_round)
        LOGGER.info("player %s goes all-in for %d", seat.name, shove)
        events.append({"ev": "ALLIN", "player": seat.name, "amount": shove})
    else:
        raise ValueError(f"Unsupported action {action}")

    game.pending.discard(seat_idx)
    if game.current_bet > previous_bet:
        # A bigger bet puts everyone still able to act back on the hook.
        game.pending = {idx for idx in game.actionable_indices() if idx != seat_idx}
    return events


def post_blind(game: Game, seat_idx: int, amount: int) -> int:
    """Force a blind; a short stack posts what it has and is all-in."""
    seat = game.players[seat_idx]
    posted = min(amount, seat.cash)
    _commit_chips(game, seat, posted)
    return posted


def _commit_chips(game: Game, seat: Player, amount: int) -> None:
    amount = min(amount, seat.cash)
    seat.cash -= amount
    seat.bet_this_round += amount
    seat.total_in_pot += amount
    game.pot += amount
    if seat.cash == 0:
        seat.all_in = True


def open_street(game: Game, first_seat: int) -> None:
    """Queue every player who can still act and point ``position`` at the first of them."""
    actionable = game.actionable_indices()
    game.pending = set(actionable)
    if len(actionable) <= 1 and all(
        game.players[idx].bet_this_round >= game.current_bet for idx in actionable
    ):
        # Nobody left to bet against: the board runs out without action.
        game.pending.clear()
    if game.pending:
        position = game.first_index_from(first_seat, lambda idx, _: idx in game.pending)
        assert position is not None
        game.position = position


def is_street_complete(game: Game) -> bool:
    return len(game.live_indices()) <= 1 or not game.pending


def advance_position(game: Game) -> Optional[Player]:
    """Move ``position`` to the next player who still has to act this street."""
    if is_street_complete(game):
        return None
    position = game.next_index(game.position, lambda idx, _: idx in game.pending)
    if position is None:
        raise RuntimeError("Pending players vanished from the table")
    game.position = position
    return game.players[position]


def finish_street(game: Game) -> List[Dict[str, object]]:
    """Close the betting round and reveal the next community cards."""
    if not is_street_complete(game):
        raise RuntimeError("Street still has players to act")
    for seat in game.players:
        seat.reset_for_round()
    game.current_bet = 0
    game.pending.clear()

    if game.round not in _REVEALS:
        game.round = Round.SHOWDOWN
        LOGGER.debug("betting closed on the river")
        return []

    next_round, count = _REVEALS[game.round]
    cards = deal(game.deck, count)
    game.community.extend(cards)
    game.round = next_round
    LOGGER.debug("%s: %s", next_round.value, " ".join(cards_to_labels(game.community)))

    open_street(game, game.button_index + 1)
    return [{"ev": next_round.value, "cards": cards_to_labels(cards)}]
