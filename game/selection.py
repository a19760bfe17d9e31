"""
Range selection for Hard mode
困難模式的範圍選擇（不可變的牌集合）
"""

from typing import FrozenSet, Iterable, Iterator, Optional

from .card import Card, Rank, Suit, RANKS, SUITS

DECK_SIZE = 52


class RangeSelection:
    """
    玩家在困難模式中圈選的牌

    每個操作都回傳新的 RangeSelection；已發出的牌（used）不能被選取
    """

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: FrozenSet[Card] = frozenset(cards)

    @property
    def cards(self) -> FrozenSet[Card]:
        return self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeSelection):
            return NotImplemented
        return self._cards == other._cards

    def __hash__(self) -> int:
        return hash(self._cards)

    def __repr__(self) -> str:
        labels = ' '.join(sorted(c.display for c in self._cards))
        return f"RangeSelection({labels})"

    def matches(self, card: Card) -> bool:
        return card in self._cards

    def toggle_card(self, card: Card, used: FrozenSet[Card] = frozenset()) -> 'RangeSelection':
        """切換單張牌；已發出的牌不變"""
        if card in used:
            return self
        return RangeSelection(self._cards ^ {card})

    def toggle_rank(self, rank: Rank, used: FrozenSet[Card] = frozenset()) -> 'RangeSelection':
        """切換某點數的全部花色：若未發出的都已選取則全部取消，否則全部選取"""
        return self._toggle_group([Card(rank, suit) for suit in SUITS], used)

    def toggle_suit(self, suit: Suit, used: FrozenSet[Card] = frozenset()) -> 'RangeSelection':
        """切換某花色的全部點數"""
        return self._toggle_group([Card(rank, suit) for rank in RANKS], used)

    def _toggle_group(self, group: Iterable[Card], used: FrozenSet[Card]) -> 'RangeSelection':
        available = {card for card in group if card not in used}
        if available <= self._cards:
            return RangeSelection(self._cards - available)
        return RangeSelection(self._cards | available)

    def clear(self) -> 'RangeSelection':
        return RangeSelection()

    def without(self, used: Iterable[Card]) -> 'RangeSelection':
        """移除已發出的牌"""
        return RangeSelection(self._cards - frozenset(used))

    def cards_per_match(self, used_count: int) -> Optional[float]:
        """平均每翻幾張牌會命中一次；沒選牌時回傳 None"""
        if not self._cards:
            return None
        return (DECK_SIZE - used_count) / len(self._cards)
