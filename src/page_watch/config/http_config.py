"""
HTTP client configuration module for the page monitoring system.

This module builds the aiohttp objects shared by the whole process: the
client session used for page fetches and SMS delivery, and the DNS resolver
used to check target hosts.
"""

import logging

import aiohttp
from aiohttp.abc import AbstractResolver
from aiohttp.resolver import DefaultResolver

from page_watch.config import MonitoringContext
from page_watch.config.constants import DEFAULT_USER_AGENT

# Module logger
logger = logging.getLogger(__name__)


def get_http_session(context: MonitoringContext) -> aiohttp.ClientSession:
    """
    Create the HTTP client session shared by fetcher and notifiers.

    Must be called from a running event loop. Timeouts and redirect handling
    are left to the aiohttp defaults.

    Args:
        context: Configuration context.

    Returns:
        aiohttp.ClientSession: The shared session.
    """
    logger.debug(f"Creating HTTP session for {context.instance_id}")
    return aiohttp.ClientSession(headers={"User-Agent": DEFAULT_USER_AGENT})


def get_dns_resolver() -> AbstractResolver:
    """
    Create the aiohttp resolver used for target host lookups.

    Must be called from a running event loop.
    """
    return DefaultResolver()
