"""Shared fixtures for the test suite."""

from typing import List

from game.card import Card, Rank, Suit, cards_from_string


def ordered_deck() -> List[Card]:
    """未洗牌的 52 張（花色、點數順序）"""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def stacked_deck(front: str) -> List[Card]:
    """指定牌放在最上面，其餘依固定順序接在後面"""
    top = cards_from_string(front)
    return top + [card for card in ordered_deck() if card not in top]
