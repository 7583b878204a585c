import random

import pytest

from holdem.cards import Rank, new_deck, parse_cards, shuffle
from holdem.evaluator import Hand, HandKind, evaluate_best, evaluate_five, evaluate_hand, evaluate_seven

ACE, KING, QUEEN, JACK, TEN = Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN
NINE, SEVEN, SIX, FIVE, FOUR = Rank.NINE, Rank.SEVEN, Rank.SIX, Rank.FIVE, Rank.FOUR


@pytest.mark.parametrize(
    "labels, expected",
    [
        (["AC", "KC", "QC", "JC", "TC", "2D", "7H"], Hand(HandKind.STRAIGHT_FLUSH, ACE)),
        (["AS", "AH", "AD", "AC", "KD", "2C", "3H"], Hand(HandKind.FOUR_OF_A_KIND, ACE)),
        (["QC", "QD", "QS", "9H", "9S", "2C", "3D"], Hand(HandKind.FULL_HOUSE, QUEEN, NINE)),
        (["AH", "JH", "9H", "6H", "2H", "3C", "4D"], Hand(HandKind.FLUSH, ACE)),
        (["9H", "8D", "7C", "6S", "5H", "2C", "KD"], Hand(HandKind.STRAIGHT, NINE)),
        (["8H", "8D", "8S", "QD", "JS", "2C", "4H"], Hand(HandKind.THREE_OF_A_KIND, Rank.EIGHT)),
        (["7H", "7D", "4S", "4C", "AS", "9D", "2H"], Hand(HandKind.TWO_PAIR, SEVEN, FOUR)),
        (["6H", "6S", "QH", "8D", "4C", "2S", "3D"], Hand(HandKind.PAIR, SIX)),
        (["AS", "KD", "JH", "9C", "4D", "3S", "2H"], Hand(HandKind.HIGH_CARD, ACE)),
    ],
)
def test_evaluate_seven_identifies_all_hand_categories(labels, expected):
    assert evaluate_seven(parse_cards(labels)) == expected


def test_royal_flush_is_a_straight_flush_to_the_ace():
    hand = evaluate_hand(parse_cards(["AC", "KC"]), parse_cards(["QC", "JC", "TC", "3D", "8S"]))
    assert hand.kind == HandKind.STRAIGHT_FLUSH
    assert hand.high == ACE


def test_wheel_is_a_five_high_straight():
    hand = evaluate_hand(parse_cards(["AD", "2C"]), parse_cards(["3H", "4S", "5D", "9C", "KH"]))
    assert hand == Hand(HandKind.STRAIGHT, FIVE)
    assert hand < Hand(HandKind.STRAIGHT, SIX)


def test_wheel_straight_flush():
    hand = evaluate_seven(parse_cards(["AH", "2H", "3H", "4H", "5H", "KC", "QD"]))
    assert hand == Hand(HandKind.STRAIGHT_FLUSH, FIVE)


def test_broadway_without_flush_is_ace_high_straight():
    hand = evaluate_seven(parse_cards(["AD", "KC", "QH", "JS", "TD", "3C", "2H"]))
    assert hand == Hand(HandKind.STRAIGHT, ACE)


def test_longest_run_uses_its_highest_card():
    hand = evaluate_seven(parse_cards(["2C", "3D", "4H", "5S", "6C", "7D", "KH"]))
    assert hand == Hand(HandKind.STRAIGHT, SEVEN)


def test_flush_and_unsuited_straight_do_not_make_a_straight_flush():
    # Hearts T-8-7-6-2 plus a 9 of clubs: the straight is not all hearts.
    hand = evaluate_seven(parse_cards(["TH", "8H", "7H", "6H", "2H", "9C", "5D"]))
    assert hand == Hand(HandKind.FLUSH, TEN)


def test_flush_high_card_comes_from_the_flush_suit():
    hand = evaluate_seven(parse_cards(["9S", "7S", "5S", "3S", "2S", "AH", "KD"]))
    assert hand == Hand(HandKind.FLUSH, NINE)


def test_three_pairs_keep_the_two_highest():
    hand = evaluate_seven(parse_cards(["KH", "KD", "9S", "9C", "4H", "4D", "2S"]))
    assert hand == Hand(HandKind.TWO_PAIR, KING, NINE)


def test_two_sets_of_trips_make_a_full_house():
    hand = evaluate_seven(parse_cards(["KH", "KD", "KS", "9C", "9H", "9D", "2S"]))
    assert hand == Hand(HandKind.FULL_HOUSE, KING, NINE)


def test_full_house_takes_the_highest_available_pair():
    hand = evaluate_seven(parse_cards(["5H", "5D", "5S", "JC", "JD", "3H", "3S"]))
    assert hand == Hand(HandKind.FULL_HOUSE, FIVE, JACK)


def test_aces_count_high_for_pairs_and_high_cards():
    pair = evaluate_seven(parse_cards(["AH", "AD", "KC", "QS", "9H", "2D", "3C"]))
    assert pair == Hand(HandKind.PAIR, ACE)
    assert pair > Hand(HandKind.PAIR, KING)


def test_evaluation_ignores_card_order():
    cards = parse_cards(["7H", "7D", "4S", "4C", "AS", "9D", "2H"])
    expected = evaluate_seven(cards)
    rng = random.Random(3)
    for _ in range(10):
        rng.shuffle(cards)
        assert evaluate_seven(cards) == expected


def test_evaluate_seven_requires_seven_distinct_cards():
    with pytest.raises(ValueError, match="Expected 7 cards"):
        evaluate_seven(parse_cards(["AH", "KH", "QH", "JH", "TH", "9H"]))
    with pytest.raises(ValueError, match="Duplicate"):
        evaluate_seven(parse_cards(["AH", "AH", "QH", "JH", "TH", "9H", "2C"]))


def test_hand_comparison_orders_kind_then_high_then_low():
    assert Hand(HandKind.FLUSH, SIX) > Hand(HandKind.STRAIGHT, ACE)
    assert Hand(HandKind.FULL_HOUSE, FOUR, FIVE) > Hand(HandKind.FLUSH, ACE)
    assert Hand(HandKind.TWO_PAIR, KING, NINE) > Hand(HandKind.TWO_PAIR, KING, Rank.EIGHT)
    assert Hand(HandKind.FULL_HOUSE, ACE, FOUR) > Hand(HandKind.FULL_HOUSE, KING, QUEEN)
    assert Hand(HandKind.STRAIGHT, SIX).greater(Hand(HandKind.STRAIGHT, FIVE))
    assert Hand(HandKind.STRAIGHT, FIVE).less(Hand(HandKind.STRAIGHT, SIX))
    assert not Hand(HandKind.PAIR, ACE).less(Hand(HandKind.PAIR, ACE))


def test_kickers_are_not_compared_beyond_high_and_low():
    hand_a = evaluate_seven(parse_cards(["AH", "AD", "KC", "QS", "9H", "2D", "3C"]))
    hand_b = evaluate_seven(parse_cards(["AH", "AD", "QC", "JS", "8H", "2D", "3C"]))
    assert hand_a == hand_b
    assert not hand_a > hand_b
    assert Hand(HandKind.PAIR, ACE, KING) == Hand(HandKind.PAIR, ACE)


def test_hand_descriptions():
    assert str(Hand(HandKind.FULL_HOUSE, KING, NINE)) == "Full House (King, Nine)"
    assert str(Hand(HandKind.STRAIGHT, FIVE)) == "Straight (Five high)"
    assert str(Hand(HandKind.THREE_OF_A_KIND, QUEEN)) == "Three of a Kind (Queen)"
    assert str(Hand(HandKind.STRAIGHT_FLUSH, ACE)) == "Straight Flush (Ace high)"


def test_evaluate_five_and_evaluate_best_cover_short_hands():
    assert evaluate_five(parse_cards(["AH", "2D", "3C", "4S", "5H"])) == Hand(HandKind.STRAIGHT, FIVE)
    assert evaluate_best(parse_cards(["QC", "QD", "QS", "9H", "9S", "2C"])) == Hand(
        HandKind.FULL_HOUSE, QUEEN, NINE
    )
    with pytest.raises(ValueError, match="Expected 5 cards"):
        evaluate_five(parse_cards(["AH", "2D", "3C", "4S"]))
    with pytest.raises(ValueError, match="Expected 5 to 7 cards"):
        evaluate_best(parse_cards(["AH", "2D", "3C", "4S"]))


def test_evaluate_seven_matches_brute_force_on_seeded_deals():
    rng = random.Random(2024)
    for _ in range(1_500):
        deck = new_deck()
        shuffle(deck, rng)
        cards = deck[:7]
        assert evaluate_seven(cards) == evaluate_best(cards), cards
