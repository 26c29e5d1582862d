"""
Core interfaces for the page monitoring system.

This module defines the abstract base classes the monitoring worker is built
on. Network access and alert delivery sit behind these contracts so that the
probing and alerting logic can be exercised without real DNS, HTTP or SMS.
"""

import abc
from typing import AsyncIterator, List

from .domain import Contact, ScheduledTarget


class WorkScheduler(abc.ABC):
    """
    Abstract interface for a tick based scheduler.

    Its responsibility is to decide which targets are due on each tick and to
    provide them as an asynchronous stream of batches.
    """

    @abc.abstractmethod
    def due_targets(self) -> List[ScheduledTarget]:
        """
        Returns the targets due at the current tick and advances the tick counter.

        Returns:
            List[ScheduledTarget]: Due targets in configured order.
        """
        pass

    @abc.abstractmethod
    async def stop(self) -> None:
        """
        Stops yielding batches. A sweep already handed out is not interrupted.

        Returns:
            None
        """
        pass

    def __aiter__(self) -> AsyncIterator[List[ScheduledTarget]]:
        return self

    @abc.abstractmethod
    async def __anext__(self) -> List[ScheduledTarget]:
        """
        Waits for the next tick and returns its batch.

        Raises:
            StopAsyncIteration: When the scheduler has been stopped.
        """
        raise StopAsyncIteration


class HostResolver(abc.ABC):
    """Abstract interface for resolving the host of a target URL."""

    @abc.abstractmethod
    async def resolve(self, url: str, max_retries: int) -> None:
        """
        Resolves the host part of the URL.

        Args:
            url: The target URL.
            max_retries: Total number of lookup attempts.

        Raises:
            ResolutionError: When no attempt returned an address.
        """
        pass


class PageFetcher(abc.ABC):
    """Abstract interface for retrieving the body of a target URL."""

    @abc.abstractmethod
    async def fetch(self, url: str) -> str:
        """
        Issues a GET request and returns the whole response body.

        Args:
            url: The target URL.

        Returns:
            str: The decoded response body.

        Raises:
            FetchError: On transport errors or an unreadable body.
        """
        pass


class Notifier(abc.ABC):
    """
    Abstract interface for a component that delivers a message to one contact.

    How the message travels (SMS, log, ...) is up to the implementation.
    """

    @abc.abstractmethod
    async def send(self, contact: Contact, message: str) -> None:
        """
        Delivers a message to a single contact.

        Args:
            contact: The recipient.
            message: The exact text to deliver.

        Raises:
            DeliveryError: When the message could not be delivered.
        """
        pass
