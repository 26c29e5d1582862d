"""
Target prober combining resolution, fetching and assertion evaluation.

The prober turns every probe of a target into a single Outcome. Network
failures and assertion failures are reported through the outcome detail
and never raised to the caller.
"""

import logging

from page_watch.config.constants import DEFAULT_DNS_ATTEMPTS, MIN_URL_LENGTH
from page_watch.contracts import HostResolver, PageFetcher
from page_watch.domain import Outcome, Target
from page_watch.evaluator.regex_evaluator import first_failure
from page_watch.exceptions import FetchError, ResolutionError

# Module logger
logger = logging.getLogger(__name__)


class TargetProber:
    """
    Produces the OK / WARNING / ERROR outcome of one target for one cycle.

    Error assertions are evaluated before warning assertions, and warnings
    are only looked at when no error assertion failed.
    """

    def __init__(
        self,
        resolver: HostResolver,
        fetcher: PageFetcher,
        dns_attempts: int = DEFAULT_DNS_ATTEMPTS,
    ) -> None:
        """
        Args:
            resolver: Component resolving the target host.
            fetcher: Component retrieving the target body.
            dns_attempts: Total number of DNS lookup attempts per probe.
        """
        self._resolver: HostResolver = resolver
        self._fetcher: PageFetcher = fetcher
        self._dns_attempts: int = dns_attempts

    async def probe(self, target: Target) -> Outcome:
        """
        Probes a target and classifies the result.

        Args:
            target: The target to probe.

        Returns:
            Outcome: OK, WARNING(detail) or ERROR(detail).
        """
        if len(target.url) < MIN_URL_LENGTH:
            # nothing to check
            return Outcome.ok()

        try:
            await self._resolver.resolve(target.url, self._dns_attempts)
            body = await self._fetcher.fetch(target.url)
        except (ResolutionError, FetchError) as e:
            logger.info(f"Probe of '{target.alias}' failed: {e}")
            return Outcome.error(str(e))

        failure = first_failure(target.errors, body)
        if failure is not None:
            return Outcome.error(str(failure))

        failure = first_failure(target.warnings, body)
        if failure is not None:
            return Outcome.warning(str(failure))

        return Outcome.ok()
