"""
Tick based implementation of the WorkScheduler interface.

The scheduler keeps a monotonically increasing tick counter. The first tick
selects every target so that everything is checked once at startup. On later
ticks a target is due when the tick counter is a multiple of its interval.
"""

import asyncio
import logging
from typing import List, Sequence

from page_watch.config.constants import DEFAULT_TICK_SECONDS
from page_watch.contracts import WorkScheduler
from page_watch.domain import ScheduledTarget, Target

# Module logger
logger = logging.getLogger(__name__)


class TickScheduler(WorkScheduler):
    """
    Yields the due targets once per tick period.

    The first batch is returned immediately; the following ones after waiting
    'tick_seconds'. The wait is cut short by stop(), which ends the iteration.
    """

    def __init__(self, targets: Sequence[Target], tick_seconds: float = DEFAULT_TICK_SECONDS) -> None:
        """
        Initializes a new TickScheduler instance.

        Args:
            targets: The configured targets, in configured order.
            tick_seconds: Duration of one tick in seconds.

        Raises:
            ValueError: If any of the parameters have invalid values.
        """
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive.")
        for target in targets:
            if target.interval < 1:
                raise ValueError(f"interval of target '{target.alias}' must be at least 1.")

        self._targets: List[Target] = list(targets)
        self._tick_seconds: float = tick_seconds
        self._tick: int = 0
        self._next_tick_at: float = 0.0
        self._stopped = asyncio.Event()

    @property
    def tick(self) -> int:
        return self._tick

    def is_due(self, target: Target) -> bool:
        return self._tick == 0 or self._tick % target.interval == 0

    def due_targets(self) -> List[ScheduledTarget]:
        batch = [
            ScheduledTarget(index, target)
            for index, target in enumerate(self._targets)
            if self.is_due(target)
        ]
        self._tick += 1
        return batch

    async def stop(self) -> None:
        logger.info("Closing scheduler...")
        self._stopped.set()

    async def __anext__(self) -> List[ScheduledTarget]:
        """
        Waits for the next tick and returns its batch.

        Raises:
            StopAsyncIteration: When the scheduler has been stopped.
        """
        if self._stopped.is_set():
            raise StopAsyncIteration

        loop = asyncio.get_running_loop()
        if self._tick > 0:
            # ticks fire at a fixed rate, a slow sweep eats into the next wait
            remaining = max(0.0, self._next_tick_at - loop.time())
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                pass  # tick elapsed
            if self._stopped.is_set():
                raise StopAsyncIteration
        self._next_tick_at = max(self._next_tick_at, loop.time()) + self._tick_seconds

        return self.due_targets()
