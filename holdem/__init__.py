"""Texas Hold'em rules: cards, hand evaluation, betting and pot resolution."""

from .betting import (
    OutOfTurnError,
    advance_position,
    finish_street,
    is_street_complete,
    min_raise_to,
    open_street,
    post_blind,
    take_action,
)
from .cards import Card, Rank, Suit, card_from_string, deal, new_deck, parse_cards, parse_label, shuffle
from .evaluator import Hand, HandKind, evaluate_best, evaluate_hand, evaluate_seven
from .game import Game, new_game
from .models import (
    Action,
    ActionType,
    GameConfig,
    HandResult,
    MatchResult,
    Player,
    RemainderPolicy,
    Round,
    Snapshot,
)
from .showdown import resolve_pot

__all__ = [
    "Action",
    "ActionType",
    "Card",
    "Game",
    "GameConfig",
    "Hand",
    "HandKind",
    "HandResult",
    "MatchResult",
    "OutOfTurnError",
    "Player",
    "Rank",
    "RemainderPolicy",
    "Round",
    "Snapshot",
    "Suit",
    "advance_position",
    "card_from_string",
    "deal",
    "evaluate_best",
    "evaluate_hand",
    "evaluate_seven",
    "finish_street",
    "is_street_complete",
    "min_raise_to",
    "new_deck",
    "new_game",
    "open_street",
    "parse_cards",
    "parse_label",
    "post_blind",
    "resolve_pot",
    "shuffle",
    "take_action",
]
