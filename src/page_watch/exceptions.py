"""
Exception hierarchy for the page monitoring system.

Configuration errors are fatal and stop the process at startup. Resolution,
fetch and assertion errors are per-probe signals that end up as the detail
of an ERROR or WARNING outcome and never escape a sweep. Delivery errors are
raised by notifiers and logged by the dispatcher.
"""


class PageWatchError(Exception):
    """Base class for every error raised by page_watch."""


class ConfigurationError(PageWatchError):
    """Raised when the target, contact or notifier configuration is unusable."""


class ResolutionError(PageWatchError):
    """Raised when the host of a target URL cannot be resolved."""


class FetchError(PageWatchError):
    """Raised when a target body cannot be retrieved or decoded."""


class AssertionFailure(PageWatchError):
    """Raised when a response body violates a regex assertion."""


class DeliveryError(PageWatchError):
    """Raised when a notifier fails to deliver a message to a contact."""
