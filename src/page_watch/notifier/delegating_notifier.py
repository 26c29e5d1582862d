"""
Delegating notifier implementation.

This module provides a composite implementation of the Notifier interface
that hands every message to several child notifiers concurrently. A failure
in one notifier does not prevent the others from running.
"""

import asyncio
import logging
from typing import List

from page_watch.contracts import Notifier
from page_watch.domain import Contact
from page_watch.exceptions import DeliveryError

# Module logger
logger = logging.getLogger(__name__)


class DelegatingNotifier(Notifier):
    """
    A Notifier following the Composite pattern.

    Every child notifier gets the message. Failures are logged per child and,
    if any child failed, a single DeliveryError is raised once all of them
    have run so that the caller still sees the delivery as failed.
    """

    def __init__(self, notifiers: List[Notifier]) -> None:
        """
        Args:
            notifiers: The notifiers to delegate to.
        """
        self._notifiers: List[Notifier] = notifiers

    async def _send_with_one(self, notifier: Notifier, contact: Contact, message: str) -> bool:
        try:
            await notifier.send(contact, message)
            return True
        except Exception as e:
            logger.exception(
                f"Notifier '{type(notifier).__name__}' failed for contact {contact.alias} with error: {e}",
            )
            return False

    async def send(self, contact: Contact, message: str) -> None:
        if not self._notifiers:
            return

        results = await asyncio.gather(
            *[self._send_with_one(notifier, contact, message) for notifier in self._notifiers]
        )
        if not all(results):
            raise DeliveryError(
                f"{results.count(False)} of {len(results)} notifiers failed for '{contact.alias}'"
            )
