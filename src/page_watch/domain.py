"""
Domain models for the page monitoring system.

This module defines the core data structures used throughout the application:
monitored targets with their regex assertions, alert contacts, the per-cycle
probe outcome and the per-target alerting state kept by the hysteresis tracker.
"""

from enum import Enum
from typing import List, NamedTuple, Optional


class Severity(str, Enum):
    """
    Kind of alert emitted for a target.

    Inheriting from 'str' keeps the members usable wherever a plain label is
    expected, for example in log records.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"


class OutcomeStatus(str, Enum):
    """Tri-state classification of a single probe."""

    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Assertion(NamedTuple):
    """
    A regex check applied to the body of a target response.

    Existence mode is active when 'exists' or 'missing' is set: the assertion
    only looks at whether the pattern matches somewhere in the body. Otherwise
    range mode reads the first capture group of the first match as an integer
    and compares it with [min_value, max_value].

    Attributes:
        alias: Display name used as prefix of failure messages.
        regex: The pattern to search for. An empty pattern disables the assertion.
        exists: Fail when the pattern is found.
        missing: Fail when the pattern is not found.
        max_value: Upper bound for the captured integer in range mode.
        min_value: Lower bound for the captured integer in range mode.
    """

    alias: str
    regex: str
    exists: bool = False
    missing: bool = False
    max_value: int = 0
    min_value: int = 0

    @property
    def existence_mode(self) -> bool:
        return self.exists or self.missing


class Target(NamedTuple):
    """
    Represents a single monitored page with its complete configuration.

    Attributes:
        alias: Unique display name of the target.
        url: The URL to probe. A URL shorter than four characters is never probed.
        interval: Check frequency in scheduler ticks, at least 1.
        alert_class: Bitmask routing alerts to contacts.
        threshold: Consecutive bad cycles required before alerting, at least 1.
        errors: Assertions whose failure yields an ERROR outcome.
        warnings: Assertions whose failure yields a WARNING outcome.
    """

    alias: str
    url: str
    interval: int
    alert_class: int
    threshold: int
    errors: List[Assertion]
    warnings: List[Assertion]


class Contact(NamedTuple):
    """
    An alert recipient.

    Attributes:
        alias: Name used to look the contact up for manual alerts.
        phone: Phone number for SMS delivery, may be empty.
        email: Email address, may be empty.
        class_mask: Bitmask of target classes this contact wants to hear about.
    """

    alias: str
    phone: str
    email: str
    class_mask: int

    def wants(self, target: Target) -> bool:
        """Whether alerts of the given target should be routed to this contact."""
        return self.class_mask & target.alert_class != 0


class Outcome(NamedTuple):
    """
    The result of probing one target on one check cycle.

    Attributes:
        status: OK, WARNING or ERROR.
        detail: Human readable reason for WARNING and ERROR, None for OK.
    """

    status: OutcomeStatus
    detail: Optional[str] = None

    @classmethod
    def ok(cls) -> "Outcome":
        return cls(OutcomeStatus.OK)

    @classmethod
    def warning(cls, detail: str) -> "Outcome":
        return cls(OutcomeStatus.WARNING, detail)

    @classmethod
    def error(cls, detail: str) -> "Outcome":
        return cls(OutcomeStatus.ERROR, detail)


class TargetState(NamedTuple):
    """
    Alerting state of a single target, owned by the hysteresis tracker.

    The zero value (the default) means the target is healthy.

    Attributes:
        err_active: An ERROR alert was sent and the incident is unresolved.
        warn_active: A WARNING alert was sent and the incident is unresolved.
        err_count: Consecutive ERROR outcomes counted towards the threshold.
        warn_count: Consecutive WARNING outcomes counted towards the threshold.
    """

    err_active: bool = False
    warn_active: bool = False
    err_count: int = 0
    warn_count: int = 0


class ScheduledTarget(NamedTuple):
    """A target selected for the current tick, with its position in the target list."""

    index: int
    target: Target
