"""
SMS notifier backed by the Plivo REST API.

Messages are posted with aiohttp to the Plivo message endpoint, authenticated
with the account auth id and token. Contacts without a phone number are
skipped.
"""

import asyncio
import logging
from typing import NamedTuple

import aiohttp

from page_watch.contracts import Notifier
from page_watch.domain import Contact
from page_watch.exceptions import DeliveryError

# Module logger
logger = logging.getLogger(__name__)

PLIVO_API_URL = "https://api.plivo.com/v1/Account/{auth_id}/Message/"


class PlivoSettings(NamedTuple):
    """
    Credentials of the Plivo account used to send SMS.

    Attributes:
        auth_id: Account auth id, also the basic auth user name.
        token: Account auth token, the basic auth password.
        number: Sender phone number.
    """

    auth_id: str
    token: str
    number: str


class PlivoNotifier(Notifier):
    """Sends alerts as text messages through Plivo."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: PlivoSettings,
        api_url: str = PLIVO_API_URL,
    ) -> None:
        """
        Args:
            session: The shared aiohttp session.
            settings: Plivo account credentials and sender number.
            api_url: Message endpoint, with an {auth_id} placeholder.
        """
        self._session: aiohttp.ClientSession = session
        self._settings: PlivoSettings = settings
        self._url: str = api_url.format(auth_id=settings.auth_id)
        self._auth = aiohttp.BasicAuth(settings.auth_id, settings.token)

    async def send(self, contact: Contact, message: str) -> None:
        """
        Sends a text message to the contact phone number.

        Raises:
            DeliveryError: When the API call fails or is rejected.
        """
        if not contact.phone:
            logger.debug(f"Contact '{contact.alias}' has no phone number, skipping SMS.")
            return

        logger.info(f"Sending text message to {contact.alias}")
        payload = {"src": self._settings.number, "dst": contact.phone, "text": message}
        try:
            async with self._session.post(self._url, json=payload, auth=self._auth) as response:
                response.raise_for_status()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryError(f"SMS to '{contact.alias}' failed: {e}") from e
