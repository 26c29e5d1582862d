"""
Alert formatting and routing to contacts.

An alert raised for a target goes to every contact whose class mask shares
a bit with the target class. Each contact is served independently: a failed
delivery is logged and the remaining contacts are still notified.
"""

import logging
from typing import List, Sequence

from page_watch.contracts import Notifier
from page_watch.domain import Contact, Severity, Target

# Module logger
logger = logging.getLogger(__name__)


def format_alert(target: Target, severity: Severity, detail: str) -> str:
    """
    Builds the text of an alert.

    Args:
        target: The target the alert is about.
        severity: ERROR or WARNING.
        detail: The outcome detail.

    Returns:
        str: The message sent to contacts.
    """
    if severity == Severity.ERROR:
        return f"Error on '{target.alias}'! {detail}"
    return f"Warning on '{target.alias}': {detail}"


class AlertDispatcher:
    """Routes alerts and manual messages to contacts through a notifier."""

    def __init__(self, contacts: Sequence[Contact], notifier: Notifier) -> None:
        """
        Args:
            contacts: The configured contacts, in configured order.
            notifier: Component delivering a message to a single contact.
        """
        self._contacts: List[Contact] = list(contacts)
        self._notifier: Notifier = notifier

    def recipients(self, target: Target) -> List[Contact]:
        return [contact for contact in self._contacts if contact.wants(target)]

    async def _send_to_one(self, contact: Contact, message: str) -> bool:
        """
        Delivers a message to one contact, logging instead of raising on failure.

        Returns:
            bool: True if the notifier reported no error.
        """
        try:
            await self._notifier.send(contact, message)
            return True
        except Exception as e:
            logger.exception(f"Delivery to '{contact.alias}' failed with error: {e}")
            return False

    async def dispatch(self, target: Target, severity: Severity, detail: str) -> int:
        """
        Sends an alert about a target to every interested contact.

        Args:
            target: The target the alert is about.
            severity: ERROR or WARNING.
            detail: The outcome detail.

        Returns:
            int: Number of contacts the alert was delivered to.
        """
        message = format_alert(target, severity, detail)
        recipients = self.recipients(target)
        logger.warning(f"{message} (notifying {len(recipients)} contacts)")

        delivered = 0
        for contact in recipients:
            if await self._send_to_one(contact, message):
                delivered += 1
        return delivered

    async def send_to_alias(self, alias: str, message: str) -> bool:
        """
        Sends an exact message to the first contact with the given alias.

        This path is independent of the alerting state of any target.

        Args:
            alias: Alias of the contact.
            message: The text to deliver.

        Returns:
            bool: Whether a contact with that alias exists.
        """
        for contact in self._contacts:
            if contact.alias == alias:
                await self._send_to_one(contact, message)
                return True
        logger.info(f"No contact with alias '{alias}'.")
        return False
