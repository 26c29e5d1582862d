"""
HTTP fetcher implementation using the aiohttp library.

This module provides an implementation of the PageFetcher interface that
issues a plain GET request and returns the complete response body. Target
pages are expected to be small, so the body is read in memory at once.
"""

import asyncio
import logging
import time

import aiohttp

from page_watch.contracts import PageFetcher
from page_watch.exceptions import FetchError

# Module logger
logger = logging.getLogger(__name__)


class AiohttpFetcher(PageFetcher):
    """
    A concrete implementation of PageFetcher using the aiohttp library.

    The request uses the defaults of the shared session: no extra timeout,
    default redirect handling and no authentication. The status code is not
    checked; error pages are returned like any other body so that the
    assertions decide whether the content is acceptable. Bytes that do not
    decode with the response charset are replaced rather than rejected.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """
        Initializes the fetcher with a shared aiohttp ClientSession.

        Args:
            session: An active aiohttp.ClientSession to be used for requests.
        """
        self._session: aiohttp.ClientSession = session

    async def fetch(self, url: str) -> str:
        """
        Performs a GET request against the URL and returns the body.

        Args:
            url: The target URL.

        Returns:
            str: The decoded response body.

        Raises:
            FetchError: On transport errors, timeouts or an unreadable body.
        """
        logger.debug(f"Starting fetch for {url}")
        start_time: float = time.time()

        try:
            async with self._session.get(url) as response:
                # pages without a charset are not always utf-8
                body: str = await response.text(errors="replace")
                status_code: int = response.status
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        logger.debug(
            f"Fetched {url} in {(time.time() - start_time):.3f}s with status {status_code}"
        )
        return body
