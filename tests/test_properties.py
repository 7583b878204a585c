"""Property tests: evaluator agreement and chip conservation under random play."""

from hypothesis import given, settings, strategies as st

from holdem.betting import min_raise_to
from holdem.cards import new_deck
from holdem.evaluator import evaluate_best, evaluate_seven
from holdem.models import Action

from .helpers import create_dealer

seven_cards = st.lists(st.sampled_from(new_deck()), min_size=7, max_size=7, unique=True)


@given(seven_cards)
def test_seven_card_evaluator_agrees_with_brute_force(cards):
    assert evaluate_seven(cards) == evaluate_best(cards)


@given(seven_cards, st.randoms(use_true_random=False))
def test_evaluation_ignores_card_order(cards, rng):
    shuffled = list(cards)
    rng.shuffle(shuffled)
    assert evaluate_seven(shuffled) == evaluate_seven(cards)


def choose_action(dealer, choice):
    """Map a small integer onto an action for whoever is to act."""
    game = dealer.game
    name = game.acting_player.name
    if choice == 0:
        return Action.fold(name)
    if choice <= 5:
        return Action.check_call(name)
    if choice <= 8:
        return Action.raise_to(name, min_raise_to(game) + (choice - 6) * game.big_blind)
    return Action.all_in(name)


@settings(max_examples=60, deadline=None)
@given(
    st.integers(min_value=2, max_value=6),
    st.integers(min_value=0, max_value=10_000),
    st.lists(st.integers(min_value=0, max_value=9), min_size=1, max_size=300),
)
def test_chips_are_conserved_under_random_play(seats, seed, choices):
    names = [f"P{idx}" for idx in range(seats)]
    dealer = create_dealer(names, starting_cash=300, seed=seed, blind_increase_every=5)
    game = dealer.game
    total = game.total_chips()

    for choice in choices:
        if game.is_hand_complete():
            if dealer.start_hand() is None:
                break
            dealer.advance()
            assert game.total_chips() == total
            continue

        dealer.apply(choose_action(dealer, choice))

        assert game.total_chips() == total
        assert all(seat.cash >= 0 for seat in game.players)
        assert all(seat.bet_this_round <= game.current_bet for seat in game.players)
        if not game.is_hand_complete():
            assert game.position in game.pending
            assert game.acting_player.can_act
