"""
Unit tests for the AiohttpResolver class.

The tests follow the Arrange-Act-Assert (AAA) pattern and mock the underlying
aiohttp resolver.
"""

import asyncio
import socket
from unittest.mock import AsyncMock

import pytest
from aiohttp.abc import AbstractResolver

from page_watch.exceptions import ResolutionError
from page_watch.resolver.aiohttp_resolver import AiohttpResolver

ADDRESS = {
    "hostname": "example.com",
    "host": "93.184.216.34",
    "port": 0,
    "family": socket.AF_INET,
    "proto": 0,
    "flags": 0,
}


@pytest.fixture
def dns() -> AsyncMock:
    dns = AsyncMock(spec=AbstractResolver)
    dns.resolve.return_value = [ADDRESS]
    return dns


@pytest.mark.asyncio
async def test_resolve_should_look_up_the_url_host(dns: AsyncMock) -> None:
    # Arrange
    resolver = AiohttpResolver(dns)

    # Act
    await resolver.resolve("https://example.com:8443/status?x=1", 3)

    # Assert
    dns.resolve.assert_awaited_once_with("example.com", 0, family=socket.AF_UNSPEC)


@pytest.mark.asyncio
async def test_resolve_should_retry_after_lookup_errors(dns: AsyncMock) -> None:
    # Arrange
    dns.resolve.side_effect = [OSError("temporary failure"), asyncio.TimeoutError(), [ADDRESS]]
    resolver = AiohttpResolver(dns)

    # Act
    await resolver.resolve("https://example.com", 3)

    # Assert
    assert dns.resolve.await_count == 3


@pytest.mark.asyncio
async def test_resolve_should_fail_once_attempts_are_exhausted(dns: AsyncMock) -> None:
    # Arrange
    dns.resolve.side_effect = OSError("Name or service not known")
    resolver = AiohttpResolver(dns)

    # Act / Assert
    with pytest.raises(ResolutionError, match="failed to resolve"):
        await resolver.resolve("https://nowhere.invalid", 3)
    assert dns.resolve.await_count == 3


@pytest.mark.asyncio
async def test_resolve_should_not_retry_an_empty_answer(dns: AsyncMock) -> None:
    # Arrange
    dns.resolve.return_value = []
    resolver = AiohttpResolver(dns)

    # Act / Assert
    with pytest.raises(ResolutionError, match="didn't resolve to any ip address"):
        await resolver.resolve("https://example.com", 3)
    dns.resolve.assert_awaited_once()


@pytest.mark.asyncio
async def test_resolve_should_wrap_hosts_that_cannot_be_encoded(dns: AsyncMock) -> None:
    # Arrange
    dns.resolve.side_effect = UnicodeError("encoding with 'idna' codec failed")
    resolver = AiohttpResolver(dns)

    # Act / Assert
    with pytest.raises(ResolutionError, match="invalid host"):
        await resolver.resolve("http://" + "a" * 70 + ".example.com/", 3)
    dns.resolve.assert_awaited_once()


@pytest.mark.asyncio
async def test_resolve_should_try_at_least_once(dns: AsyncMock) -> None:
    # Arrange
    resolver = AiohttpResolver(dns)

    # Act
    await resolver.resolve("https://example.com", 0)

    # Assert
    dns.resolve.assert_awaited_once()


@pytest.mark.asyncio
async def test_resolve_should_fail_for_urls_without_host(dns: AsyncMock) -> None:
    # Arrange
    resolver = AiohttpResolver(dns)

    # Act / Assert
    with pytest.raises(ResolutionError, match="no host"):
        await resolver.resolve("/relative/path", 3)
    dns.resolve.assert_not_awaited()


@pytest.mark.asyncio
async def test_close_should_close_the_underlying_resolver(dns: AsyncMock) -> None:
    # Arrange
    resolver = AiohttpResolver(dns)

    # Act
    await resolver.close()

    # Assert
    dns.close.assert_awaited_once()
