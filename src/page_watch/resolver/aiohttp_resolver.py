"""
DNS resolver implementation built on aiohttp's resolver classes.

This module provides an implementation of the HostResolver interface that
looks up the host of a target URL with a bounded number of attempts. Lookups
occasionally time out, so every failure is retried right away to avoid
reporting a transient DNS hiccup as an outage.
"""

import asyncio
import logging
import socket
from typing import Optional

from aiohttp.abc import AbstractResolver
from aiohttp.resolver import DefaultResolver
from yarl import URL

from page_watch.contracts import HostResolver
from page_watch.exceptions import ResolutionError

# Module logger
logger = logging.getLogger(__name__)


class AiohttpResolver(HostResolver):
    """
    A concrete implementation of HostResolver using an aiohttp resolver.

    Any lookup error consumes one attempt and the identical lookup is issued
    again, without backoff. A lookup that succeeds but returns no address is
    a failure and is not retried.
    """

    def __init__(self, resolver: Optional[AbstractResolver] = None) -> None:
        """
        Initializes the resolver.

        Args:
            resolver: The aiohttp resolver performing the lookups. Defaults to
                aiohttp's DefaultResolver.
        """
        self._resolver: AbstractResolver = resolver if resolver is not None else DefaultResolver()

    async def resolve(self, url: str, max_retries: int) -> None:
        """
        Resolves the host of the URL, trying at most max_retries times.

        Args:
            url: The target URL.
            max_retries: Total number of lookup attempts.

        Raises:
            ResolutionError: When every attempt failed, when the lookup returned
                no address or when the URL has no valid host.
        """
        try:
            host = URL(url).host
        except ValueError as e:
            raise ResolutionError(f'Url "{url}" could not be parsed: {e}') from e
        if not host:
            raise ResolutionError(f'Url "{url}" has no host to resolve')

        attempts = max(1, max_retries)
        for attempt in range(1, attempts + 1):
            try:
                addresses = await self._resolver.resolve(host, 0, family=socket.AF_UNSPEC)
            except (OSError, asyncio.TimeoutError) as e:
                logger.debug(f"Lookup of {host} failed (attempt {attempt}/{attempts}): {e}")
                if attempt == attempts:
                    raise ResolutionError(f'Url "{url}" failed to resolve: {e}') from e
                continue
            except UnicodeError as e:
                # host cannot be idna encoded, not retried
                raise ResolutionError(f'Url "{url}" has an invalid host: {e}') from e

            if not addresses:
                raise ResolutionError(f'Url "{url}" didn\'t resolve to any ip address')
            return

    async def close(self) -> None:
        await self._resolver.close()
