"""
Card and Deck primitives for Range Poker
撲克牌與牌組
"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Optional, Union
import random

from .errors import InvalidInputError, InvalidRankError


class Suit(Enum):
    """花色枚舉"""
    HEARTS = ("hearts", "♥")
    DIAMONDS = ("diamonds", "♦")
    CLUBS = ("clubs", "♣")
    SPADES = ("spades", "♠")

    def __init__(self, label: str, symbol: str):
        self.label = label
        self.symbol = symbol

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    def __str__(self) -> str:
        return self.symbol


class Rank(Enum):
    """點數枚舉"""
    TWO = (2, "2")
    THREE = (3, "3")
    FOUR = (4, "4")
    FIVE = (5, "5")
    SIX = (6, "6")
    SEVEN = (7, "7")
    EIGHT = (8, "8")
    NINE = (9, "9")
    TEN = (10, "10")
    JACK = (11, "J")
    QUEEN = (12, "Q")
    KING = (13, "K")
    ACE = (14, "A")

    def __init__(self, number: int, symbol: str):
        self.number = number
        self.symbol = symbol

    def __str__(self) -> str:
        return self.symbol

    def __lt__(self, other: 'Rank') -> bool:
        return self.number < other.number

    def __gt__(self, other: 'Rank') -> bool:
        return self.number > other.number


SUITS: List[Suit] = list(Suit)
RANKS: List[Rank] = list(Rank)

# 點數符號 -> 數值
_SYMBOL_VALUES = {rank.symbol: rank.number for rank in Rank}

# 輸入解析時額外接受的寫法
_RANK_ALIASES = {'T': '10'}

_VALUE_SYMBOLS = {rank.number: rank.symbol for rank in Rank}


@dataclass(frozen=True)
class Card:
    """
    撲克牌（不可變）

    Attributes:
        rank: 點數
        suit: 花色
    """
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return self.display

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def display(self) -> str:
        """顯示格式，例如 10♥"""
        return f"{self.rank.symbol}{self.suit.symbol}"

    @property
    def value(self) -> int:
        """取得牌的數值（用於比較）"""
        return self.rank.number


def create_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """
    建立一副洗好的 52 張新牌

    Args:
        rng: 可注入的亂數產生器（測試用）；預設每次使用系統亂數
    """
    deck = [Card(rank, suit) for suit in Suit for rank in Rank]
    # random.shuffle 是 Fisher-Yates
    (rng or random.SystemRandom()).shuffle(deck)
    return deck


def rank_value(rank: Union[Rank, str]) -> int:
    """點數 -> 數值：2..10 不變，J=11, Q=12, K=13, A=14（只接受這 13 個符號）"""
    if isinstance(rank, Rank):
        return rank.number
    if isinstance(rank, str) and rank in _SYMBOL_VALUES:
        return _SYMBOL_VALUES[rank]
    raise InvalidRankError(f"Invalid rank: {rank!r}")


def value_to_symbol(value: int) -> str:
    """數值 -> 點數符號"""
    return _VALUE_SYMBOLS.get(value, str(value))


def parse_rank(symbol: str) -> Rank:
    """解析使用者輸入的點數（不分大小寫，10 也可寫成 T）"""
    key = symbol.strip().upper()
    value = rank_value(_RANK_ALIASES.get(key, key))
    return next(rank for rank in Rank if rank.number == value)


def parse_suit(symbol: str) -> Suit:
    """解析花色：符號、英文字母或全名"""
    suit_map = {
        '♥': Suit.HEARTS, 'H': Suit.HEARTS, 'HEARTS': Suit.HEARTS,
        '♦': Suit.DIAMONDS, 'D': Suit.DIAMONDS, 'DIAMONDS': Suit.DIAMONDS,
        '♣': Suit.CLUBS, 'C': Suit.CLUBS, 'CLUBS': Suit.CLUBS,
        '♠': Suit.SPADES, 'S': Suit.SPADES, 'SPADES': Suit.SPADES,
    }
    key = symbol.strip().upper()
    if key not in suit_map:
        raise InvalidInputError(f"Invalid suit: {symbol!r}")
    return suit_map[key]


def card_from_string(card_str: str) -> Card:
    """
    從字串解析牌

    Examples:
        card_from_string("A♠") -> Card(ACE, SPADES)
        card_from_string("10h") -> Card(TEN, HEARTS)
        card_from_string("Ks") -> Card(KING, SPADES)
    """
    card_str = card_str.strip()
    if len(card_str) < 2:
        raise InvalidInputError(f"Invalid card: {card_str!r}")
    return Card(parse_rank(card_str[:-1]), parse_suit(card_str[-1]))


def cards_from_string(cards_str: str) -> List[Card]:
    """
    從字串解析多張牌（空格分隔）

    Example:
        cards_from_string("A♠ K♠ Q♠ J♠ 10♠")
    """
    return [card_from_string(s) for s in cards_str.split()]


def cards_to_string(cards: List[Card]) -> str:
    return ' '.join(c.display for c in cards)
