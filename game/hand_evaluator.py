"""
Hand Evaluator for Range Poker
手牌評估器 - 判斷牌型與比較大小
"""

from enum import IntEnum
from itertools import combinations
from typing import List, Tuple, Optional, Sequence
from collections import Counter
from dataclasses import dataclass

from .card import Card, value_to_symbol
from .errors import InvalidInputError


class HandRank(IntEnum):
    """
    手牌等級枚舉（數值越大越強）
    """
    HIGH_CARD = 1       # 高牌
    ONE_PAIR = 2        # 一對
    TWO_PAIR = 3        # 兩對
    THREE_OF_A_KIND = 4 # 三條
    STRAIGHT = 5        # 順子
    FLUSH = 6           # 同花
    FULL_HOUSE = 7      # 葫蘆
    FOUR_OF_A_KIND = 8  # 四條
    STRAIGHT_FLUSH = 9  # 同花順
    ROYAL_FLUSH = 10    # 皇家同花順

    @property
    def display_name(self) -> str:
        return _HAND_NAMES[self]


_HAND_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

WHEEL = [14, 5, 4, 3, 2]

# 超過這個張數就不列舉所有 5 張組合，改用逐牌型直接挑選
ENUMERATION_LIMIT = 8


class HandEvaluation:
    """
    5 張牌的評估結果

    Attributes:
        rank: 牌型等級
        tiebreakers: 用於比較的點數序列（最重要的在前）
        name: 牌型名稱
    """

    def __init__(self, rank: HandRank, tiebreakers: Sequence[int], name: str = ""):
        self.rank = rank
        self.tiebreakers: Tuple[int, ...] = tuple(tiebreakers)
        self.name = name or rank.display_name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"HandEvaluation({self.rank.name}, tiebreakers={list(self.tiebreakers)})"

    def compare_to(self, other: 'HandEvaluation') -> int:
        return HandEvaluator.compare_hands(self, other)

    def __lt__(self, other: 'HandEvaluation') -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: 'HandEvaluation') -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: 'HandEvaluation') -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: 'HandEvaluation') -> bool:
        return self.compare_to(other) >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandEvaluation):
            return NotImplemented
        return self.rank == other.rank and self.tiebreakers == other.tiebreakers

    def __hash__(self) -> int:
        return hash((self.rank, self.tiebreakers))

    def to_dict(self) -> dict:
        return {
            "rank": int(self.rank),
            "category": self.rank.name,
            "tiebreakers": list(self.tiebreakers),
            "name": self.name,
        }


@dataclass(frozen=True)
class BestHand:
    """從多張牌中選出的最佳 5 張及其評估"""
    cards: Tuple[Card, ...]
    evaluation: HandEvaluation


def _group_ranks(values: List[int]) -> List[Tuple[int, int]]:
    """(value, count) 依張數降序、再依點數降序"""
    return sorted(Counter(values).items(), key=lambda item: (item[1], item[0]), reverse=True)


def _straight_values(high: int) -> List[int]:
    """以 high 為最大的順子點數；5 代表 wheel"""
    if high == 5:
        return [5, 4, 3, 2, 14]
    return list(range(high, high - 5, -1))


def _highest_straight(values) -> Optional[int]:
    for high in range(14, 4, -1):
        if all(v in values for v in _straight_values(high)):
            return high
    return None


class HandEvaluator:
    """
    手牌評估器

    提供靜態方法評估手牌；無狀態，可在任何執行緒同時呼叫
    """

    @staticmethod
    def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
        """
        評估正好 5 張牌

        Raises:
            InvalidInputError: 牌數不是 5
        """
        if len(cards) != 5:
            raise InvalidInputError(f"Hand must have exactly 5 cards, got {len(cards)}")

        values = sorted((c.value for c in cards), reverse=True)
        is_flush = len({c.suit for c in cards}) == 1
        is_straight, straight_high = HandEvaluator._check_straight(values)

        groups = _group_ranks(values)
        counts = [count for _, count in groups]

        if is_flush and is_straight and values[0] == 14 and values[4] == 10:
            return HandEvaluation(HandRank.ROYAL_FLUSH, values)

        if is_flush and is_straight:
            return HandEvaluation(HandRank.STRAIGHT_FLUSH, [straight_high])

        if counts[0] == 4:  # 四條
            return HandEvaluation(HandRank.FOUR_OF_A_KIND, [groups[0][0], groups[1][0]])

        if counts[0] == 3 and counts[1] == 2:  # 葫蘆
            return HandEvaluation(HandRank.FULL_HOUSE, [groups[0][0], groups[1][0]])

        if is_flush:
            return HandEvaluation(HandRank.FLUSH, values)

        if is_straight:
            return HandEvaluation(HandRank.STRAIGHT, [straight_high])

        if counts[0] == 3:  # 三條
            kickers = [value for value, _ in groups[1:]]
            return HandEvaluation(HandRank.THREE_OF_A_KIND, [groups[0][0]] + kickers)

        if counts[0] == 2 and counts[1] == 2:  # 兩對
            return HandEvaluation(HandRank.TWO_PAIR, [groups[0][0], groups[1][0], groups[2][0]])

        if counts[0] == 2:  # 一對
            kickers = [value for value, _ in groups[1:]]
            return HandEvaluation(HandRank.ONE_PAIR, [groups[0][0]] + kickers)

        return HandEvaluation(HandRank.HIGH_CARD, values)

    @staticmethod
    def _check_straight(sorted_values: List[int]) -> Tuple[bool, int]:
        """
        檢查是否為順子（輸入為降序點數）

        Returns:
            (is_straight, highest_card_value)
        """
        if len(set(sorted_values)) == 5 and sorted_values[0] - sorted_values[4] == 4:
            return True, sorted_values[0]

        # A-2-3-4-5 (wheel) 是唯一 A 當 1 的情況
        if sorted_values == WHEEL:
            return True, 5

        return False, 0

    @staticmethod
    def compare_hands(hand1: HandEvaluation, hand2: HandEvaluation) -> int:
        """
        比較兩個評估結果

        Returns:
            1 if hand1 wins
            -1 if hand2 wins
            0 if tie
        """
        if hand1.rank != hand2.rank:
            return 1 if hand1.rank > hand2.rank else -1

        for k1, k2 in zip(hand1.tiebreakers, hand2.tiebreakers):
            if k1 != k2:
                return 1 if k1 > k2 else -1

        # 前綴相同時較長者為大
        if len(hand1.tiebreakers) != len(hand2.tiebreakers):
            return 1 if len(hand1.tiebreakers) > len(hand2.tiebreakers) else -1

        return 0

    @staticmethod
    def find_best_hand(cards: Sequence[Card]) -> BestHand:
        """
        從 5 張以上的牌中找出最佳 5 張組合

        多個組合同分時回傳最先遇到的那一組；只有評估結果有意義

        Raises:
            InvalidInputError: 少於 5 張
        """
        if len(cards) < 5:
            raise InvalidInputError(f"Need at least 5 cards, got {len(cards)}")

        if len(cards) == 5:
            return BestHand(tuple(cards), HandEvaluator.evaluate_hand(cards))

        if len(cards) > ENUMERATION_LIMIT:
            five = HandEvaluator._pick_best_five(cards)
            return BestHand(tuple(five), HandEvaluator.evaluate_hand(five))

        best_cards: Optional[Tuple[Card, ...]] = None
        best_eval: Optional[HandEvaluation] = None

        for combo in combinations(cards, 5):
            evaluation = HandEvaluator.evaluate_hand(combo)
            if best_eval is None or HandEvaluator.compare_hands(evaluation, best_eval) > 0:
                best_cards = combo
                best_eval = evaluation

        return BestHand(best_cards, best_eval)

    @staticmethod
    def _pick_best_five(cards: Sequence[Card]) -> List[Card]:
        """
        直接依牌型由高到低挑出最佳 5 張（評估結果與列舉所有組合相同）
        """
        ordered = sorted(cards, key=lambda c: c.value, reverse=True)
        by_value = {}
        by_suit = {}
        for card in ordered:
            by_value.setdefault(card.value, []).append(card)
            by_suit.setdefault(card.suit, []).append(card)

        def top_excluding(values, count):
            return [c for c in ordered if c.value not in values][:count]

        # 同花順 / 皇家同花順
        best_high = None
        best_cards = None
        for suited in by_suit.values():
            if len(suited) < 5:
                continue
            suited_by_value = {c.value: c for c in suited}
            high = _highest_straight(suited_by_value)
            if high is not None and (best_high is None or high > best_high):
                best_high = high
                best_cards = [suited_by_value[v] for v in _straight_values(high)]
        if best_cards:
            return best_cards

        quads = sorted((v for v, group in by_value.items() if len(group) >= 4), reverse=True)
        if quads:
            return by_value[quads[0]][:4] + top_excluding({quads[0]}, 1)

        trips = sorted((v for v, group in by_value.items() if len(group) >= 3), reverse=True)
        pairs = sorted((v for v, group in by_value.items() if len(group) >= 2), reverse=True)
        if trips:
            others = [v for v in pairs if v != trips[0]]
            if others:
                return by_value[trips[0]][:3] + by_value[others[0]][:2]

        flushes = [suited[:5] for suited in by_suit.values() if len(suited) >= 5]
        if flushes:
            return max(flushes, key=lambda five: [c.value for c in five])

        high = _highest_straight(by_value)
        if high is not None:
            return [by_value[v][0] for v in _straight_values(high)]

        if trips:
            return by_value[trips[0]][:3] + top_excluding({trips[0]}, 2)

        if len(pairs) >= 2:
            return (by_value[pairs[0]][:2] + by_value[pairs[1]][:2]
                    + top_excluding({pairs[0], pairs[1]}, 1))

        if pairs:
            return by_value[pairs[0]][:2] + top_excluding({pairs[0]}, 3)

        return ordered[:5]

    @staticmethod
    def evaluate_partial_hand(cards: Sequence[Card]) -> Optional[str]:
        """
        選牌過程中的即時牌型描述

        1-4 張只看點數重複（不判斷順子/同花）；5 張以上回傳最佳牌型名稱；
        沒有牌回傳 None
        """
        if not cards:
            return None
        if len(cards) >= 5:
            return HandEvaluator.find_best_hand(cards).evaluation.name

        values = sorted((c.value for c in cards), reverse=True)
        groups = _group_ranks(values)
        top_value, top_count = groups[0]

        if top_count == 4:
            return f"Four {value_to_symbol(top_value)}s"
        if top_count == 3:
            return f"Three {value_to_symbol(top_value)}s"
        if top_count == 2 and len(groups) >= 2 and groups[1][1] == 2:
            return f"{value_to_symbol(top_value)}s and {value_to_symbol(groups[1][0])}s"
        if top_count == 2:
            return f"Pair of {value_to_symbol(top_value)}s"

        return f"{value_to_symbol(values[0])} High"
