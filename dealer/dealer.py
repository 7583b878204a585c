from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from holdem.betting import (
    advance_position,
    finish_street,
    is_street_complete,
    min_raise_to,
    open_street,
    post_blind,
    take_action,
)
from holdem.cards import deal, new_deck, shuffle
from holdem.game import Game, new_game
from holdem.models import Action, GameConfig, HandResult, MatchResult, Round, Snapshot
from holdem.showdown import resolve_pot

LOGGER = logging.getLogger("holdem.dealer")

Listener = Callable[[Dict[str, object], Snapshot], None]

# Dealer is the single writer of a Game. Actions come in through an asyncio
# queue; observers only ever see frozen snapshots.


class ActionSourceClosed(Exception):
    """The action queue delivered ``None``; the match cannot continue."""


class Dealer:
    def __init__(
        self,
        game: Game,
        actions: "asyncio.Queue[Optional[Action]]",
        *,
        move_time_ms: Optional[int] = None,
    ) -> None:
        self.game = game
        self.actions = actions
        self.move_time_ms = game.config.move_time_ms if move_time_ms is None else move_time_ms
        self.listeners: List[Listener] = []
        self.winner: Optional[str] = None
        self.hands_played = 0

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def _publish(self, events: Iterable[Dict[str, object]]) -> None:
        events = list(events)
        if not events or not self.listeners:
            return
        snapshot = self.game.snapshot()
        for event in events:
            for listener in self.listeners:
                listener(event, snapshot)

    # Hand lifecycle --------------------------------------------------

    def start_hand(self) -> Optional[List[Dict[str, object]]]:
        """Set up the next hand. Returns ``None`` once the match has a winner."""
        game = self.game
        events = self._remove_busted_players()
        if len(game.players) <= 1:
            self.winner = game.players[0].name if game.players else None
            LOGGER.info("player %s wins the match", self.winner)
            events.append({"ev": "MATCH_END", "winner": self.winner})
            self._publish(events)
            return None

        config = game.config
        if game.hand_number > 0 and config.blind_increase_every > 0 and game.hand_number % config.blind_increase_every == 0:
            game.small_blind += config.blind_increase_by
            LOGGER.info("blinds increased to %d/%d", game.small_blind, game.big_blind)
            events.append({"ev": "BLINDS_UP", "sb": game.small_blind, "bb": game.big_blind})

        for seat in game.players:
            seat.reset_for_hand()
        game.community.clear()
        game.current_bet = 0
        game.round = Round.PRE_FLOP
        game.hand_number += 1

        count = len(game.players)
        game.blind_index = (game.blind_index + 1) % count
        sb_seat = game.blind_index
        bb_seat = (sb_seat + 1) % count
        sb_posted = post_blind(game, sb_seat, game.small_blind)
        bb_posted = post_blind(game, bb_seat, game.big_blind)
        game.current_bet = game.big_blind
        events.append(
            {
                "ev": "POST_BLINDS",
                "hand": game.hand_number,
                "sb_player": game.players[sb_seat].name,
                "bb_player": game.players[bb_seat].name,
                "sb": sb_posted,
                "bb": bb_posted,
            }
        )

        game.deck = new_deck()
        shuffle(game.deck, game.rng)
        self._deal_hole_cards(sb_seat)

        open_street(game, bb_seat + 1)
        LOGGER.debug("hand %d started; small blind %s", game.hand_number, game.players[sb_seat].name)
        return events

    def _remove_busted_players(self) -> List[Dict[str, object]]:
        game = self.game
        big_blind = game.big_blind
        if game.players and all(seat.cash < big_blind for seat in game.players):
            # Nobody can post: the biggest stack (first seat on ties) takes the match.
            keep = [max(game.players, key=lambda seat: seat.cash)]
        else:
            keep = [seat for seat in game.players if seat.cash >= big_blind]

        events: List[Dict[str, object]] = []
        if len(keep) == len(game.players):
            return events

        # Keep the blind rotating from the same place after seats disappear.
        kept = {id(seat) for seat in keep}
        previous = game.blind_index
        game.blind_index = sum(1 for idx, seat in enumerate(game.players) if id(seat) in kept and idx <= previous) - 1
        for seat in game.players:
            if id(seat) not in kept:
                LOGGER.info("player %s busted out. better luck next time!", seat.name)
                game.eliminated.append(seat)
                events.append({"ev": "ELIMINATED", "player": seat.name, "cash": seat.cash})
        game.players = keep
        del game.hands[len(keep):]
        return events

    def _deal_hole_cards(self, first_seat: int) -> None:
        game = self.game
        count = len(game.players)
        for _ in range(2):
            for step in range(count):
                seat = game.players[(first_seat + step) % count]
                seat.hole_cards.extend(deal(game.deck, 1))

    def advance(self) -> List[Dict[str, object]]:
        """Run streets and the showdown forward until a player has to act or the hand is over."""
        game = self.game
        events: List[Dict[str, object]] = []
        while not game.is_hand_complete():
            if len(game.live_indices()) <= 1 or game.round == Round.SHOWDOWN:
                events.extend(resolve_pot(game))
                break
            if not is_street_complete(game):
                break
            events.extend(finish_street(game))
        return events

    def apply(self, action: Action) -> List[Dict[str, object]]:
        """Apply one action; ``ValueError`` leaves the game untouched."""
        events = take_action(self.game, action.player, action.kind, action.amount)
        advance_position(self.game)
        events.extend(self.advance())
        return events

    def prompt(self) -> Dict[str, object]:
        game = self.game
        seat = game.acting_player
        return {
            "ev": "ACT",
            "player": seat.name,
            "to_call": max(game.current_bet - seat.bet_this_round, 0),
            "min_raise_to": min_raise_to(game),
            "max_raise_to": seat.cash + seat.bet_this_round,
        }

    def fallback_action(self) -> Action:
        # Timeout preference: check when free, otherwise fold.
        seat = self.game.acting_player
        if self.game.current_bet <= seat.bet_this_round:
            return Action.check_call(seat.name)
        return Action.fold(seat.name)

    async def _next_action(self) -> Action:
        timeout = self.move_time_ms / 1000 if self.move_time_ms and self.move_time_ms > 0 else None
        try:
            action = await asyncio.wait_for(self.actions.get(), timeout)
        except asyncio.TimeoutError:
            fallback = self.fallback_action()
            LOGGER.info("player %s timed out; applying %s", fallback.player, fallback.kind.value)
            self._publish([{"ev": "TIMEOUT", "player": fallback.player, "action": fallback.kind.value}])
            return fallback
        if action is None:
            raise ActionSourceClosed("Action source closed")
        return action

    async def play_hand(self) -> Optional[HandResult]:
        events = self.start_hand()
        if events is None:
            return None
        self._publish(events)
        self._publish(self.advance())

        game = self.game
        result = HandResult(hand_number=game.hand_number)
        while not game.is_hand_complete():
            self._publish([self.prompt()])
            try:
                action = await self._next_action()
            except ActionSourceClosed:
                self._abort_hand()
                raise
            try:
                events = self.apply(action)
            except ValueError as exc:
                LOGGER.warning(
                    "Rejected action player=%s action=%s amount=%s reason=%s",
                    action.player,
                    action.kind.value,
                    action.amount,
                    exc,
                )
                self._publish([{"ev": "REJECTED", "player": action.player, "reason": str(exc)}])
                continue
            self._record(result, events)
            self._publish(events)

        self.hands_played += 1
        result.eliminated = [seat.name for seat in game.players if seat.cash < game.big_blind]
        self._publish(
            [
                {
                    "ev": "HAND_END",
                    "hand": game.hand_number,
                    "stacks": [{"player": seat.name, "cash": seat.cash} for seat in game.players],
                }
            ]
        )
        return result

    def _record(self, result: HandResult, events: Sequence[Dict[str, object]]) -> None:
        for event in events:
            if event["ev"] == "POT_AWARD":
                result.payouts.append((str(event["player"]), int(event["amount"])))  # type: ignore[arg-type]
            elif event["ev"] == "HOUSE_TAKE":
                result.house_take += int(event["amount"])  # type: ignore[arg-type]

    def _abort_hand(self) -> None:
        game = self.game
        for seat in game.players:
            seat.cash += seat.total_in_pot
            game.pot -= seat.total_in_pot
            seat.total_in_pot = 0
            seat.bet_this_round = 0
        if game.pot != 0:
            raise RuntimeError(f"Refund left {game.pot} chips in the pot")
        game.current_bet = 0
        game.pending.clear()
        game.round = Round.SHOWDOWN
        LOGGER.warning("hand %d aborted; bets refunded", game.hand_number)
        self._publish([{"ev": "ABORTED", "hand": game.hand_number}])

    async def run(self) -> MatchResult:
        max_hands = self.game.config.max_hands
        aborted = False
        while max_hands is None or self.hands_played < max_hands:
            try:
                result = await self.play_hand()
            except ActionSourceClosed:
                aborted = True
                break
            if result is None:
                break
        return MatchResult(
            winner=self.winner,
            hands_played=self.hands_played,
            stacks=[(seat.name, seat.cash) for seat in self.game.players],
            aborted=aborted,
        )


async def run_match(
    names: Sequence[str],
    actions: "asyncio.Queue[Optional[Action]]",
    *,
    config: Optional[GameConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    listeners: Iterable[Listener] = (),
) -> MatchResult:
    """Play a whole match from a fresh game until one player is left."""
    game = new_game(names, config=config, rng=rng, seed=seed)
    dealer = Dealer(game, actions)
    for listener in listeners:
        dealer.subscribe(listener)
    return await dealer.run()
