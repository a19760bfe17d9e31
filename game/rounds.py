"""
Drafting rounds for Range Poker
選牌規則與遊戲流程（簡單 / 困難模式）

簡單模式: 一次翻一張，玩家決定拿 (take) 或讓給莊家 (pass)
困難模式: 玩家圈選一個範圍，從牌堆依序翻牌，第一張命中的給玩家，其餘給莊家
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, FrozenSet

from .card import Card, create_deck, cards_to_string
from .dealing import DealEvent, DealTarget, EASY_DEAL_DELAY_MS, HARD_DEAL_DELAY_MS
from .errors import IllegalMoveError, InvalidInputError
from .hand_evaluator import BestHand, HandEvaluator
from .selection import RangeSelection

logger = logging.getLogger(__name__)

PLAYER_HAND_SIZE = 5
DEALER_HAND_SIZE = 8


class GamePhase(Enum):
    """遊戲階段"""
    DRAFTING = "drafting"      # 簡單模式選牌中
    SELECTING = "selecting"    # 困難模式圈選範圍中
    SHOWDOWN = "showdown"      # 攤牌（本局結束）


class Winner(str, Enum):
    PLAYER = "player"
    DEALER = "dealer"
    TIE = "tie"


@dataclass(frozen=True)
class ShowdownResult:
    """攤牌結果"""
    player: BestHand
    dealer: BestHand
    winner: Winner

    @property
    def headline(self) -> str:
        return {
            Winner.PLAYER: "You Win!",
            Winner.DEALER: "Dealer Wins",
            Winner.TIE: "Tie",
        }[self.winner]


def compute_showdown(player_hand: Sequence[Card], dealer_hand: Sequence[Card]) -> ShowdownResult:
    """比較玩家與莊家各自的最佳 5 張"""
    player_best = HandEvaluator.find_best_hand(player_hand)
    dealer_best = HandEvaluator.find_best_hand(dealer_hand)
    comparison = HandEvaluator.compare_hands(player_best.evaluation, dealer_best.evaluation)
    if comparison > 0:
        winner = Winner.PLAYER
    elif comparison < 0:
        winner = Winner.DEALER
    else:
        winner = Winner.TIE
    return ShowdownResult(player_best, dealer_best, winner)


def hand_strength(cards: Sequence[Card]) -> Optional[str]:
    """目前手牌的即時描述（沒有牌時為 None）"""
    return HandEvaluator.evaluate_partial_hand(cards)


class DraftRound:
    """
    一局遊戲的共用狀態

    Attributes:
        deck: 本局洗好的牌，只會從左往右讀取
        deck_index: 下一張要翻的位置
        player_hand: 玩家手牌（最多 5 張）
        dealer_hand: 莊家手牌
        phase: 目前階段
        result: 攤牌結果
    """

    mode = ""
    initial_phase = GamePhase.DRAFTING
    deal_delay_ms = EASY_DEAL_DELAY_MS

    def __init__(self, deck: Optional[Sequence[Card]] = None):
        if deck is None:
            deck = create_deck()
        if len(set(deck)) != len(deck):
            raise InvalidInputError("Deck contains duplicate cards")

        self.deck: List[Card] = list(deck)
        self.deck_index: int = 0
        self.player_hand: List[Card] = []
        self.dealer_hand: List[Card] = []
        self.phase: GamePhase = self.initial_phase
        self.result: Optional[ShowdownResult] = None

    @property
    def remaining(self) -> int:
        return len(self.deck) - self.deck_index

    @property
    def player_needs_cards(self) -> bool:
        return len(self.player_hand) < PLAYER_HAND_SIZE

    @property
    def drafting_complete(self) -> bool:
        return len(self.player_hand) == PLAYER_HAND_SIZE

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.SHOWDOWN

    @property
    def player_strength(self) -> Optional[str]:
        return hand_strength(self.player_hand)

    @property
    def dealer_strength(self) -> Optional[str]:
        return hand_strength(self.dealer_hand)

    def _draw(self) -> Card:
        if self.deck_index >= len(self.deck):
            raise IllegalMoveError("Deck is exhausted")
        card = self.deck[self.deck_index]
        self.deck_index += 1
        return card

    def _top_up_dealer(self) -> List[DealEvent]:
        """攤牌前把莊家補到 8 張（牌堆不夠就補到沒牌為止）"""
        events = []
        while len(self.dealer_hand) < DEALER_HAND_SIZE and self.remaining > 0:
            card = self._draw()
            self.dealer_hand.append(card)
            events.append(DealEvent(card, DealTarget.DEALER))
        return events

    def _finish(self) -> ShowdownResult:
        self.result = compute_showdown(self.player_hand, self.dealer_hand)
        self.phase = GamePhase.SHOWDOWN
        logger.info(
            "%s showdown: player %s (%s) vs dealer %s (%s) -> %s",
            self.mode,
            cards_to_string(list(self.result.player.cards)),
            self.result.player.evaluation.name,
            cards_to_string(list(self.result.dealer.cards)),
            self.result.dealer.evaluation.name,
            self.result.winner.value,
        )
        return self.result

    def _require_phase(self, phase: GamePhase) -> None:
        if self.phase != phase:
            raise IllegalMoveError(f"Not allowed during {self.phase.value}")


class EasyRound(DraftRound):
    """
    簡單模式

    每次翻開一張牌，玩家選擇拿走或讓給莊家；玩家滿 5 張後攤牌，
    莊家從剩下的牌補到 8 張
    """

    mode = "easy"
    initial_phase = GamePhase.DRAFTING
    deal_delay_ms = EASY_DEAL_DELAY_MS

    @property
    def current_card(self) -> Optional[Card]:
        """目前翻開的牌"""
        if self.phase != GamePhase.DRAFTING or self.remaining == 0:
            return None
        return self.deck[self.deck_index]

    @property
    def can_take(self) -> bool:
        return self.current_card is not None and self.player_needs_cards

    @property
    def can_pass(self) -> bool:
        return self.can_take and len(self.dealer_hand) < DEALER_HAND_SIZE

    def take(self) -> DealEvent:
        """把目前的牌收進玩家手牌"""
        if not self.can_take:
            raise IllegalMoveError("Cannot take a card now")
        card = self._draw()
        self.player_hand.append(card)
        logger.debug("take %s (player %d/%d)", card, len(self.player_hand), PLAYER_HAND_SIZE)
        return DealEvent(card, DealTarget.PLAYER)

    def pass_card(self) -> DealEvent:
        """把目前的牌讓給莊家"""
        if not self.can_pass:
            if self.can_take:
                raise IllegalMoveError(f"Dealer already holds {DEALER_HAND_SIZE} cards, you must take")
            raise IllegalMoveError("Cannot pass a card now")
        card = self._draw()
        self.dealer_hand.append(card)
        logger.debug("pass %s (dealer %d)", card, len(self.dealer_hand))
        return DealEvent(card, DealTarget.DEALER)

    @property
    def can_showdown(self) -> bool:
        return self.phase == GamePhase.DRAFTING and self.drafting_complete

    def showdown(self) -> List[DealEvent]:
        """
        攤牌

        Returns:
            補給莊家的牌（依序），供畫面逐張播放
        """
        if not self.can_showdown:
            raise IllegalMoveError("Your hand is not complete")
        events = self._top_up_dealer()
        self._finish()
        return events


class HardRound(DraftRound):
    """
    困難模式

    玩家圈選一組牌（範圍），從牌堆依序翻開：沒命中的全部給莊家，
    第一張命中的給玩家；重複直到玩家有 5 張。莊家手牌不設上限
    """

    mode = "hard"
    initial_phase = GamePhase.SELECTING
    deal_delay_ms = HARD_DEAL_DELAY_MS

    def __init__(self, deck: Optional[Sequence[Card]] = None):
        super().__init__(deck)
        self.exhausted = False

    @property
    def used_cards(self) -> FrozenSet[Card]:
        """已經翻過的牌"""
        return frozenset(self.deck[:self.deck_index])

    def can_deal(self, selection: RangeSelection) -> bool:
        return (
            self.phase == GamePhase.SELECTING
            and self.player_needs_cards
            and self.remaining > 0
            and len(selection.without(self.used_cards)) > 0
        )

    def deal(self, selection: RangeSelection) -> List[DealEvent]:
        """
        依圈選範圍發牌

        Returns:
            本次翻出的牌：未命中的 (DEALER) 依序在前，命中的 (PLAYER) 最後
        """
        self._require_phase(GamePhase.SELECTING)
        if not self.player_needs_cards:
            raise IllegalMoveError("Your hand is already complete")
        live = selection.without(self.used_cards)
        if not live:
            raise IllegalMoveError("Select at least one card that has not been dealt")

        events = []
        while self.remaining > 0:
            card = self._draw()
            if live.matches(card):
                self.player_hand.append(card)
                events.append(DealEvent(card, DealTarget.PLAYER))
                logger.debug("match %s after %d misses", card, len(events) - 1)
                return events
            self.dealer_hand.append(card)
            events.append(DealEvent(card, DealTarget.DEALER))

        self.exhausted = True
        logger.warning("deck exhausted without a match; %d cards went to the dealer", len(events))
        return events

    @property
    def can_showdown(self) -> bool:
        return self.phase == GamePhase.SELECTING and (
            self.drafting_complete or self.exhausted or self.remaining == 0
        )

    def showdown(self) -> List[DealEvent]:
        """
        攤牌

        牌堆用完而玩家不足 5 張時，把莊家最後拿到的牌補給玩家；
        之後莊家從剩餘牌堆補到 8 張
        """
        if not self.can_showdown:
            raise IllegalMoveError("Your hand is not complete")

        events = []
        shortfall = PLAYER_HAND_SIZE - len(self.player_hand)
        if shortfall > 0:
            if len(self.dealer_hand) < shortfall:
                raise InvalidInputError("Not enough cards to complete the player's hand")
            moved = self.dealer_hand[-shortfall:]
            del self.dealer_hand[-shortfall:]
            self.player_hand.extend(moved)
            events.extend(DealEvent(card, DealTarget.PLAYER) for card in moved)
            logger.info("auto-assigned %s to the player", cards_to_string(moved))

        events.extend(self._top_up_dealer())
        self._finish()
        return events
