"""
Core worker implementation for the page monitoring system.

This module provides the MonitoringWorker class, which runs check cycles by
coordinating the scheduler, prober, hysteresis tracker and alert dispatcher.
Targets of a cycle are handled one after the other in configured order.
"""

import asyncio
import logging
from typing import List, Optional

from .contracts import WorkScheduler
from .dispatcher import AlertDispatcher
from .domain import ScheduledTarget
from .prober import TargetProber
from .tracker import HysteresisTracker


class MonitoringWorker:
    """
    Runs sequential sweeps over the due targets.

    For every due target the worker probes it, feeds the outcome into the
    hysteresis tracker and dispatches the alert the tracker asks for, if any.
    The tracker state is touched only from here.
    """

    def __init__(
        self,
        scheduler: WorkScheduler,
        prober: TargetProber,
        tracker: HysteresisTracker,
        dispatcher: AlertDispatcher,
    ) -> None:
        """
        Initializes a new MonitoringWorker instance.

        Args:
            scheduler: Component selecting the due targets on each tick.
            prober: Component producing the outcome of a target.
            tracker: Per-target alert state machine.
            dispatcher: Component delivering alerts to contacts.
        """
        self._scheduler: WorkScheduler = scheduler
        self._prober: TargetProber = prober
        self._tracker: HysteresisTracker = tracker
        self._dispatcher: AlertDispatcher = dispatcher
        self._logger: logging.Logger = logging.getLogger(__name__)
        self._stop_task: Optional[asyncio.Task] = None

    async def _check(self, scheduled: ScheduledTarget) -> None:
        target = scheduled.target
        outcome = await self._prober.probe(target)
        self._logger.debug(f"Target '{target.alias}' outcome: {outcome.status.value}")

        severity = self._tracker.record(scheduled.index, outcome)
        if severity is not None:
            await self._dispatcher.dispatch(target, severity, outcome.detail or "")

    async def sweep(self, batch: List[ScheduledTarget]) -> None:
        """
        Checks every target of a batch, in order.

        A failure while handling one target is logged and does not prevent
        the remaining targets from being checked.

        Args:
            batch: The due targets of one tick.

        Returns:
            None
        """
        self._logger.debug(f"Sweeping {len(batch)} targets.")
        for scheduled in batch:
            try:
                await self._check(scheduled)
            except Exception as e:
                self._logger.exception(
                    f"Check failed for target '{scheduled.target.alias}' with error: {e}"
                )

    async def run_cycle(self) -> None:
        """
        Executes exactly one check cycle over the targets due at the current tick.

        Returns:
            None
        """
        await self.sweep(self._scheduler.due_targets())

    async def start(self) -> None:
        """
        Runs a sweep on every tick until the scheduler is stopped.

        Returns:
            None
        """
        self._logger.info("Starting monitoring loop.")
        async for batch in self._scheduler:
            if not batch:
                continue
            await self.sweep(batch)
        if self._stop_task is not None:
            await self._stop_task
        self._logger.info("Monitoring loop finished.")

    async def stop(self) -> None:
        """
        Requests a graceful stop. A sweep in progress runs to completion.

        Returns:
            None
        """
        self._logger.info("Initiating graceful shutdown...")
        await self._scheduler.stop()

    def request_stop(self) -> asyncio.Task:
        """
        Schedules stop() from synchronous code, such as a signal handler.

        Repeated requests share the same task, which start() awaits before
        returning.

        Returns:
            asyncio.Task: The task running stop().
        """
        if self._stop_task is None:
            self._stop_task = asyncio.get_running_loop().create_task(self.stop())
        return self._stop_task
