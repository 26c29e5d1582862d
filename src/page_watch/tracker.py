"""
Hysteresis tracking of per-target alert state.

A target has to produce 'threshold' consecutive bad outcomes before an alert
is emitted, and at most one alert is emitted per unresolved incident. A
single OK outcome clears everything, so recovery is immediate while alerting
is slow.
"""

import logging
from typing import List, Optional, Sequence

from page_watch.domain import Outcome, OutcomeStatus, Severity, Target, TargetState

# Module logger
logger = logging.getLogger(__name__)


class HysteresisTracker:
    """
    Keeps one TargetState per target, indexed by the target position.

    The tracker is the only owner of the states and is driven by the sweep,
    one outcome per due target per cycle.
    """

    def __init__(self, targets: Sequence[Target]) -> None:
        self._targets: List[Target] = list(targets)
        self._states: List[TargetState] = [TargetState() for _ in self._targets]

    def state(self, index: int) -> TargetState:
        return self._states[index]

    def record(self, index: int, outcome: Outcome) -> Optional[Severity]:
        """
        Applies the outcome of one cycle to the state of a target.

        Transitions:
        - OK resets the state to its zero value.
        - ERROR counts towards the threshold while no error alert is active.
          Reaching the threshold activates the error alert and clears an
          active warning alert, which is replaced without further notice.
        - WARNING counts towards the threshold only while neither an error
          nor a warning alert is active.

        Args:
            index: Position of the target in the configured target list.
            outcome: The outcome of this cycle's probe.

        Returns:
            Optional[Severity]: The alert to emit, or None.
        """
        target = self._targets[index]
        state = self._states[index]

        if outcome.status == OutcomeStatus.OK:
            if state != TargetState():
                logger.info(f"Target '{target.alias}' is healthy again.")
            self._states[index] = TargetState()
            return None

        if outcome.status == OutcomeStatus.ERROR:
            if state.err_active:
                return None
            err_count = state.err_count + 1
            if err_count >= target.threshold:
                self._states[index] = state._replace(
                    err_active=True, warn_active=False, err_count=err_count
                )
                return Severity.ERROR
            self._states[index] = state._replace(err_count=err_count)
            logger.debug(
                f"Target '{target.alias}' error {err_count}/{target.threshold}: {outcome.detail}"
            )
            return None

        if state.err_active or state.warn_active:
            return None
        warn_count = state.warn_count + 1
        if warn_count >= target.threshold:
            self._states[index] = state._replace(warn_active=True, warn_count=warn_count)
            return Severity.WARNING
        self._states[index] = state._replace(warn_count=warn_count)
        logger.debug(
            f"Target '{target.alias}' warning {warn_count}/{target.threshold}: {outcome.detail}"
        )
        return None
