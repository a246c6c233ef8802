"""카운트다운 서비스

상태:
- IDLE: 목표 시각 없음
- RUNNING: 목표 시각 고정, 주기적으로 남은 시간 재계산

목표 시각이 지나도 멈추지 않고 0을 계속 보고한다.
리셋할 때만 IDLE로 돌아간다.
"""

import asyncio
import math
from contextlib import suppress
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from shared.utils import get_logger
from life_expectancy.config import settings
from life_expectancy.models.output import RemainingTime
from life_expectancy.services.calendar_projector import remaining_time

logger = get_logger(__name__)

TickListener = Callable[[RemainingTime], None]


class ClockState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class CountdownClock:
    """실시간 카운트다운

    사용 예시:
        clock = CountdownClock(on_tick=print)
        clock.start(result.target_death_date)   # 이벤트 루프 안에서 호출
        ...
        await clock.reset()
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        now_fn: Callable[[], datetime] = datetime.now,
        on_tick: Optional[TickListener] = None,
    ):
        """
        Args:
            interval: 갱신 주기 (초, 기본값: settings.countdown_interval_seconds)
            now_fn: 현재 시각 함수
            on_tick: 갱신마다 호출할 콜백
        """
        self.interval = interval or settings.countdown_interval_seconds
        self._now_fn = now_fn
        self._listeners: List[TickListener] = [on_tick] if on_tick else []

        self._state = ClockState.IDLE
        self._target: Optional[datetime] = None
        self._latest = RemainingTime()
        self._task: Optional[asyncio.Task] = None
        self._tick_count = 0

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def target(self) -> Optional[datetime]:
        return self._target

    @property
    def latest(self) -> RemainingTime:
        """마지막으로 계산된 남은 시간"""
        return self._latest

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def add_listener(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> RemainingTime:
        """현재 시각 기준 남은 시간 (상태 변경 없음)"""
        if self._target is None:
            return RemainingTime()
        return remaining_time(self._target, self._now_fn())

    def tick(self) -> RemainingTime:
        """남은 시간 1회 재계산 후 리스너 호출"""
        self._latest = self.snapshot()
        self._tick_count += 1

        for listener in list(self._listeners):
            try:
                listener(self._latest)
            except Exception:
                logger.exception("카운트다운 리스너 오류")

        return self._latest

    def start(self, target: datetime) -> RemainingTime:
        """
        목표 시각 고정 후 카운트다운 시작

        실행 중인 이벤트 루프가 있으면 주기 작업을 띄우고,
        없으면 tick()을 직접 호출하는 수동 모드로 동작한다.

        Returns:
            즉시 계산된 남은 시간
        """
        self._cancel_task()
        self._target = target
        self._state = ClockState.RUNNING
        logger.info("카운트다운 시작: target=%s", target.isoformat())

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("이벤트 루프 없음, 수동 tick 모드")
            return self.tick()

        self._task = loop.create_task(self._run())
        self._latest = self.snapshot()
        return self._latest

    async def _run(self) -> None:
        """고정 주기 갱신 (단조 시계 기준, 밀린 주기는 건너뜀)"""
        loop = asyncio.get_running_loop()
        next_at = loop.time()

        while True:
            self.tick()
            next_at += self.interval

            delay = next_at - loop.time()
            if delay < 0:
                skipped = math.ceil(-delay / self.interval)
                next_at += skipped * self.interval
                delay = next_at - loop.time()

            await asyncio.sleep(max(0.0, delay))

    def _cancel_task(self) -> Optional[asyncio.Task]:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def reset(self) -> None:
        """카운트다운 중지 및 목표 시각 폐기 (RUNNING → IDLE)"""
        task = self._cancel_task()
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task

        if self._state is ClockState.RUNNING:
            logger.info("카운트다운 리셋")
        self._state = ClockState.IDLE
        self._target = None
        self._latest = RemainingTime()
        self._tick_count = 0
