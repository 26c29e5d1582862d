"""
Notifier writing alerts to the application log.

Used when no SMS credentials are configured, and next to the SMS notifier so
that every delivered alert also leaves a trace in the log.
"""

import logging

from page_watch.contracts import Notifier
from page_watch.domain import Contact

# Module logger
logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """A notifier that logs the message instead of delivering it."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level: int = level

    async def send(self, contact: Contact, message: str) -> None:
        logger.log(self._level, f"Alert for '{contact.alias}': {message}")
