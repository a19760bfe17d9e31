import random
import unittest
import sys
import os
from itertools import combinations, permutations

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game.card import cards_from_string, create_deck
from game.errors import InvalidInputError
from game.hand_evaluator import HandEvaluator, HandEvaluation, HandRank


def evaluate(labels: str) -> HandEvaluation:
    return HandEvaluator.evaluate_hand(cards_from_string(labels))


class TestEvaluateHand(unittest.TestCase):

    def test_royal_flush(self):
        result = evaluate("As Ks Qs Js 10s")
        self.assertEqual(result.rank, HandRank.ROYAL_FLUSH)
        self.assertEqual(result.tiebreakers, (14, 13, 12, 11, 10))
        self.assertEqual(result.name, "Royal Flush")

    def test_wheel_straight_flush_is_five_high(self):
        result = evaluate("As 2s 3s 4s 5s")
        self.assertEqual(result.rank, HandRank.STRAIGHT_FLUSH)
        self.assertEqual(result.tiebreakers, (5,))

    def test_full_house(self):
        result = evaluate("7h 7d 7c 2s 2h")
        self.assertEqual(result.rank, HandRank.FULL_HOUSE)
        self.assertEqual(result.tiebreakers, (7, 2))

    def test_high_card(self):
        result = evaluate("2h 5d 9c Js Ah")
        self.assertEqual(result.rank, HandRank.HIGH_CARD)
        self.assertEqual(result.tiebreakers, (14, 11, 9, 5, 2))

    def test_every_category(self):
        cases = [
            (HandRank.ROYAL_FLUSH, "10h Jh Qh Kh Ah", (14, 13, 12, 11, 10)),
            (HandRank.STRAIGHT_FLUSH, "9c 8c 7c 6c 5c", (9,)),
            (HandRank.FOUR_OF_A_KIND, "9s 9h 9d 9c 2h", (9, 2)),
            (HandRank.FULL_HOUSE, "Qc Qd Qs 9h 9s", (12, 9)),
            (HandRank.FLUSH, "Ah Jh 9h 6h 2h", (14, 11, 9, 6, 2)),
            (HandRank.STRAIGHT, "9h 8d 7c 6s 5h", (9,)),
            (HandRank.THREE_OF_A_KIND, "8h 8d 8s Qd Js", (8, 12, 11)),
            (HandRank.TWO_PAIR, "4s Kh 9h 4c Kd", (13, 4, 9)),
            (HandRank.ONE_PAIR, "6h 6s Qh 8d 4c", (6, 12, 8, 4)),
            (HandRank.HIGH_CARD, "As Kd Jh 9c 4d", (14, 13, 11, 9, 4)),
        ]
        for expected_rank, labels, tiebreakers in cases:
            with self.subTest(labels=labels):
                result = evaluate(labels)
                self.assertEqual(result.rank, expected_rank)
                self.assertEqual(result.tiebreakers, tiebreakers)
                self.assertEqual(result.name, expected_rank.display_name)

    def test_wheel_straight(self):
        result = evaluate("Ah 2d 3c 4s 5h")
        self.assertEqual(result.rank, HandRank.STRAIGHT)
        self.assertEqual(result.tiebreakers, (5,))

    def test_ace_high_straight(self):
        result = evaluate("10h Jd Qc Ks Ah")
        self.assertEqual(result.rank, HandRank.STRAIGHT)
        self.assertEqual(result.tiebreakers, (14,))

    def test_straights_do_not_wrap_around(self):
        self.assertEqual(evaluate("Qh Kd Ac 2s 3h").rank, HandRank.HIGH_CARD)
        self.assertEqual(evaluate("Kh Ad 2c 3s 4h").rank, HandRank.HIGH_CARD)

    def test_gapped_ranks_are_not_a_straight(self):
        self.assertEqual(evaluate("2h 3d 4c 5s 7h").rank, HandRank.HIGH_CARD)

    def test_wrong_card_count_raises(self):
        for labels in ("", "As Ks Qs Js", "As Ks Qs Js 10s 9s"):
            with self.subTest(labels=labels):
                with self.assertRaises(InvalidInputError):
                    HandEvaluator.evaluate_hand(cards_from_string(labels))

    def test_order_independence(self):
        for labels in ("7h 7d 7c 2s 2h", "As 2s 3s 4s 5s", "4s Kh 9h 4c Kd", "2h 5d 9c Js Ah"):
            cards = cards_from_string(labels)
            expected = HandEvaluator.evaluate_hand(cards)
            for perm in permutations(cards):
                result = HandEvaluator.evaluate_hand(list(perm))
                self.assertEqual(result.rank, expected.rank)
                self.assertEqual(result.tiebreakers, expected.tiebreakers)

    def test_random_hands_always_get_a_category(self):
        rng = random.Random(2024)
        for _ in range(300):
            hand = rng.sample(create_deck(rng), 5)
            self.assertIn(HandEvaluator.evaluate_hand(hand).rank, list(HandRank))


class TestCompareHands(unittest.TestCase):

    def test_full_house_trips_decide(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("7h 7d 7c 2s 2h"),
                                                     evaluate("8h 8d 8c 3s 3h")), -1)

    def test_category_beats_tiebreakers(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("2h 3h 4h 5h 7h"),
                                                     evaluate("Ah Ad Ac Ks Kd")), -1)

    def test_six_high_straight_beats_wheel(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("2h 3d 4c 5s 6h"),
                                                     evaluate("Ah 2d 3c 4s 5h")), 1)

    def test_kickers_break_ties(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("Ah Ad Kc Qs 9h"),
                                                     evaluate("As Ac Kd Qh 8h")), 1)

    def test_same_values_different_suits_tie(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("Ah Kd Qc Js 9h"),
                                                     evaluate("As Kc Qd Jh 9c")), 0)

    def test_royal_flushes_tie(self):
        self.assertEqual(HandEvaluator.compare_hands(evaluate("As Ks Qs Js 10s"),
                                                     evaluate("Ah Kh Qh Jh 10h")), 0)

    def test_antisymmetry_and_reflexivity(self):
        rng = random.Random(99)
        hands = [HandEvaluator.evaluate_hand(rng.sample(create_deck(rng), 5)) for _ in range(60)]
        for a in hands:
            self.assertEqual(HandEvaluator.compare_hands(a, a), 0)
            for b in hands:
                self.assertEqual(HandEvaluator.compare_hands(a, b), -HandEvaluator.compare_hands(b, a))

    def test_evaluations_sort(self):
        ordered = sorted([evaluate("7h 7d 7c 2s 2h"), evaluate("2h 5d 9c Js Ah"),
                          evaluate("As Ks Qs Js 10s")])
        self.assertEqual([e.rank for e in ordered],
                         [HandRank.HIGH_CARD, HandRank.FULL_HOUSE, HandRank.ROYAL_FLUSH])
        self.assertGreater(evaluate("As Ks Qs Js 10s"), evaluate("As 2s 3s 4s 5s"))


class TestFindBestHand(unittest.TestCase):

    def test_five_cards_matches_evaluate_hand(self):
        cards = cards_from_string("4s Kh 9h 4c Kd")
        best = HandEvaluator.find_best_hand(cards)
        self.assertEqual(best.evaluation, HandEvaluator.evaluate_hand(cards))
        self.assertEqual(set(best.cards), set(cards))

    def test_fewer_than_five_raises(self):
        with self.assertRaises(InvalidInputError):
            HandEvaluator.find_best_hand(cards_from_string("As Ks Qs Js"))

    def test_finds_straight_flush_among_eight(self):
        cards = cards_from_string("2h 9c 8c Ah 7c 6c Ad 5c")
        best = HandEvaluator.find_best_hand(cards)
        self.assertEqual(best.evaluation.rank, HandRank.STRAIGHT_FLUSH)
        self.assertEqual(best.evaluation.tiebreakers, (9,))
        self.assertEqual(set(best.cards), set(cards_from_string("9c 8c 7c 6c 5c")))

    def test_wheel_from_seven_cards(self):
        best = HandEvaluator.find_best_hand(cards_from_string("Ah 2d 3c 4s 5h 9d Kd"))
        self.assertEqual(best.evaluation.rank, HandRank.STRAIGHT)
        self.assertEqual(best.evaluation.tiebreakers, (5,))

    def test_best_of_eight_beats_every_subset(self):
        rng = random.Random(5)
        for _ in range(30):
            cards = rng.sample(create_deck(rng), 8)
            best = HandEvaluator.find_best_hand(cards)
            self.assertEqual(len(best.cards), 5)
            self.assertTrue(set(best.cards) <= set(cards))
            self.assertEqual(HandEvaluator.evaluate_hand(best.cards), best.evaluation)
            for combo in combinations(cards, 5):
                self.assertGreaterEqual(
                    HandEvaluator.compare_hands(best.evaluation, HandEvaluator.evaluate_hand(combo)), 0)

    def test_direct_pick_matches_enumeration(self):
        rng = random.Random(11)
        for size in (6, 7, 8):
            for _ in range(150):
                cards = rng.sample(create_deck(rng), size)
                enumerated = HandEvaluator.find_best_hand(cards).evaluation
                picked = HandEvaluator.evaluate_hand(HandEvaluator._pick_best_five(cards))
                self.assertEqual(picked, enumerated, msg=' '.join(c.display for c in cards))

    def test_direct_pick_on_crafted_hands(self):
        cases = [
            ("As Ks Qs Js 10s 9s 8s", HandRank.ROYAL_FLUSH),
            ("Ah Ad Ac Ks Kd Kc 2h", HandRank.FULL_HOUSE),
            ("2s 3s 4s 5s As Ah Ad", HandRank.STRAIGHT_FLUSH),
            ("9h 9d 9c 9s Ah Kh Qh", HandRank.FOUR_OF_A_KIND),
            ("2h 4h 6h 8h Th 3d 5c", HandRank.FLUSH),
            ("Ah Kd Kc Qs Qd Jh Jc", HandRank.TWO_PAIR),
        ]
        for labels, expected in cases:
            with self.subTest(labels=labels):
                cards = cards_from_string(labels)
                picked = HandEvaluator.evaluate_hand(HandEvaluator._pick_best_five(cards))
                self.assertEqual(picked.rank, expected)
                self.assertEqual(picked, HandEvaluator.find_best_hand(cards).evaluation)

    def test_large_hand(self):
        rng = random.Random(3)
        cards = rng.sample(create_deck(rng), 30)
        best = HandEvaluator.find_best_hand(cards)
        self.assertTrue(set(best.cards) <= set(cards))
        for _ in range(300):
            combo = rng.sample(cards, 5)
            self.assertGreaterEqual(best.evaluation, HandEvaluator.evaluate_hand(combo))

    def test_two_pair_kicker_outranks_third_pair(self):
        best = HandEvaluator.find_best_hand(cards_from_string("Kh Kd 8c 8s 5d 5h 2c 3d Jc"))
        self.assertEqual(best.evaluation.rank, HandRank.TWO_PAIR)
        self.assertEqual(best.evaluation.tiebreakers, (13, 8, 11))


class TestEvaluatePartialHand(unittest.TestCase):

    def test_no_cards_has_no_label(self):
        self.assertIsNone(HandEvaluator.evaluate_partial_hand([]))

    def test_labels(self):
        cases = [
            ("7h 7d", "Pair of 7s"),
            ("10h 10d 3c", "Pair of 10s"),
            ("Kh Kd Kc", "Three Ks"),
            ("Ah Ad Ac As", "Four As"),
            ("7h Jd 7c Js", "Js and 7s"),
            ("Qh", "Q High"),
            ("2h 9d 5c", "9 High"),
        ]
        for labels, expected in cases:
            with self.subTest(labels=labels):
                self.assertEqual(HandEvaluator.evaluate_partial_hand(cards_from_string(labels)), expected)

    def test_ignores_straight_and_flush_draws_below_five(self):
        self.assertEqual(HandEvaluator.evaluate_partial_hand(cards_from_string("6h 7h 8h 9h")), "9 High")

    def test_five_or_more_uses_best_hand_name(self):
        self.assertEqual(HandEvaluator.evaluate_partial_hand(cards_from_string("2h 4h 6h 8h 10h")), "Flush")
        self.assertEqual(
            HandEvaluator.evaluate_partial_hand(cards_from_string("7h 7d 7c 2s 2h 9d Kc")), "Full House")


if __name__ == "__main__":
    unittest.main()
