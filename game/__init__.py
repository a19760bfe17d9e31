# Game module initialization
"""
Range Poker - Game Module
核心遊戲引擎模組：牌組、牌型評估、選牌規則
"""

from .card import Card, Suit, Rank, create_deck, rank_value, card_from_string, cards_from_string
from .errors import GameError, InvalidInputError, InvalidRankError, IllegalMoveError
from .hand_evaluator import HandEvaluator, HandEvaluation, HandRank, BestHand
from .selection import RangeSelection
from .dealing import DealEvent, DealTarget, DealSchedule, ManualClock
from .rounds import (
    EasyRound, HardRound, GamePhase, Winner, ShowdownResult,
    compute_showdown, PLAYER_HAND_SIZE, DEALER_HAND_SIZE,
)

__all__ = [
    'Card', 'Suit', 'Rank', 'create_deck', 'rank_value', 'card_from_string', 'cards_from_string',
    'GameError', 'InvalidInputError', 'InvalidRankError', 'IllegalMoveError',
    'HandEvaluator', 'HandEvaluation', 'HandRank', 'BestHand',
    'RangeSelection',
    'DealEvent', 'DealTarget', 'DealSchedule', 'ManualClock',
    'EasyRound', 'HardRound', 'GamePhase', 'Winner', 'ShowdownResult',
    'compute_showdown', 'PLAYER_HAND_SIZE', 'DEALER_HAND_SIZE',
]
