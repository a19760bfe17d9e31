"""
Paced card reveals
發牌動畫節奏 - 與牌型判斷完全分離
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Iterable, List, Optional, Tuple
import time

from .card import Card

# 每張牌之間的延遲（毫秒）
EASY_DEAL_DELAY_MS = 200
HARD_DEAL_DELAY_MS = 150


class DealTarget(str, Enum):
    """牌的去向"""
    PLAYER = "player"
    DEALER = "dealer"


@dataclass(frozen=True)
class DealEvent:
    card: Card
    target: DealTarget

    def to_dict(self) -> dict:
        return {"card": self.card.display, "target": self.target.value}


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class ManualClock:
    """手動推進的時鐘（測試或非互動模式用）"""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms


class DealSchedule:
    """
    依固定間隔釋出發牌事件的佇列

    時鐘由呼叫端注入；delay 為 0 時所有事件立即可取
    """

    def __init__(self, delay_ms: float, clock: Optional[Callable[[], float]] = None):
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self.delay_ms = delay_ms
        self._clock = clock or monotonic_ms
        self._queue: Deque[Tuple[float, DealEvent]] = deque()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def extend(self, events: Iterable[DealEvent]) -> None:
        """排入事件；第一張在 delay 之後，之後每張再間隔 delay"""
        release_at = self._queue[-1][0] if self._queue else self._clock()
        for event in events:
            release_at += self.delay_ms
            self._queue.append((release_at, event))

    def next_release(self) -> Optional[float]:
        return self._queue[0][0] if self._queue else None

    def due(self) -> List[DealEvent]:
        """取出所有已到時間的事件"""
        now = self._clock()
        ready = []
        while self._queue and self._queue[0][0] <= now:
            ready.append(self._queue.popleft()[1])
        return ready

    def drain(self) -> List[DealEvent]:
        """不管時間，取出全部事件"""
        events = [event for _, event in self._queue]
        self._queue.clear()
        return events
