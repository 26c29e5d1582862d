"""
Main entry point for the page monitoring application.

This module loads the targets, contacts and notifier credentials, sets up
logging and the shared HTTP session, and then either sends a single test
alert or runs the monitoring loop until the process is interrupted.
"""

import asyncio
import logging
import signal
import sys
from typing import List

import aiohttp

from page_watch.config import MonitoringContext, get_context
from page_watch.config.constants import TEST_ALERT_MESSAGE
from page_watch.config.http_config import get_dns_resolver, get_http_session
from page_watch.config.loader import load_contacts, load_notifier_settings, load_targets
from page_watch.config.logging_config import configure_logging
from page_watch.contracts import Notifier
from page_watch.dispatcher import AlertDispatcher
from page_watch.exceptions import ConfigurationError
from page_watch.fetcher.aiohttp_fetcher import AiohttpFetcher
from page_watch.notifier.delegating_notifier import DelegatingNotifier
from page_watch.notifier.logging_notifier import LoggingNotifier
from page_watch.notifier.plivo_notifier import PlivoNotifier
from page_watch.prober import TargetProber
from page_watch.resolver.aiohttp_resolver import AiohttpResolver
from page_watch.scheduler.tick_scheduler import TickScheduler
from page_watch.tracker import HysteresisTracker
from page_watch.worker import MonitoringWorker


async def main(context: MonitoringContext) -> int:
    """
    Set up and run the page monitoring application.

    1. Loads and validates targets, contacts and notifier credentials
    2. Creates the HTTP session and DNS resolver
    3. Sends the test alert, if one was requested, and returns
    4. Otherwise runs the monitoring worker until SIGINT or SIGTERM

    Args:
        context: Configuration context containing all application settings.

    Returns:
        int: The process exit code.

    Raises:
        ConfigurationError: If any input file is invalid.
    """
    logger: logging.Logger = logging.getLogger(__name__)
    logger.info("Starting application...")

    targets = load_targets(context.targets_file)
    contacts = load_contacts(context.contacts_file)
    plivo_settings = load_notifier_settings(context.notifier_file)

    http_session: aiohttp.ClientSession = get_http_session(context)
    resolver = AiohttpResolver(get_dns_resolver())
    logger.info("configured: http_session")

    notifiers: List[Notifier] = [LoggingNotifier()]
    if plivo_settings is not None:
        notifiers.append(PlivoNotifier(http_session, plivo_settings))
    else:
        logger.warning("No notifier file given, alerts are only logged.")
    dispatcher = AlertDispatcher(contacts, DelegatingNotifier(notifiers))

    try:
        if context.test_alert:
            if not await dispatcher.send_to_alias(context.test_alert, TEST_ALERT_MESSAGE):
                logger.error(f"Contact '{context.test_alert}' not found!")
                return 1
            return 0

        worker = MonitoringWorker(
            scheduler=TickScheduler(targets, tick_seconds=context.tick_seconds),
            prober=TargetProber(resolver, AiohttpFetcher(http_session), context.dns_attempts),
            tracker=HysteresisTracker(targets),
            dispatcher=dispatcher,
        )

        # Stopping waits for the sweep in progress instead of cancelling it
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, worker.request_stop)

        logger.info("Worker initialized. Starting monitoring loop...")
        await worker.start()
        logger.info("Service exiting gracefully.")
        return 0
    finally:
        logger.info("Shutting down resources...")
        await http_session.close()
        await resolver.close()
        logger.info("Shutdown complete.")


if __name__ == "__main__":
    # Parse command-line arguments and environment variables
    page_watch_context: MonitoringContext = get_context()

    try:
        configure_logging(page_watch_context)
        sys.exit(asyncio.run(main(page_watch_context)))
    except ConfigurationError as e:
        logging.getLogger(__name__).critical(f"Invalid configuration: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logging.info("Shutdown initiated by user (Ctrl+C).")
