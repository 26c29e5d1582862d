"""
Configuration module for the page monitoring system.

This module provides functionality to parse command-line arguments and environment
variables to create a configuration context for the monitoring system. It defines
default values and help text for all configurable parameters.
"""

import argparse
import os
from typing import Any, List, Optional
from uuid import uuid4

from page_watch.config.constants import (
    DEFAULT_CONTACTS_FILE,
    DEFAULT_DNS_ATTEMPTS,
    DEFAULT_INSTANCE_ID_PREFIX,
    DEFAULT_LOGGING_CONFIG_FILE,
    DEFAULT_LOGGING_TYPE,
    DEFAULT_NOTIFIER_FILE,
    DEFAULT_TARGETS_FILE,
    DEFAULT_TEST_ALERT_ALIAS,
    DEFAULT_TICK_SECONDS,
)
from page_watch.config.monitoring_context import MonitoringContext


def get_context(argv: Optional[List[str]] = None) -> MonitoringContext:
    """
    Parse command-line arguments and environment variables to create a configuration context.

    For each option, the command-line argument wins, then the PAGE_WATCH_*
    environment variable, and finally the default value.

    Args:
        argv: Arguments to parse, defaults to sys.argv.

    Returns:
        MonitoringContext: A configuration context object containing all parsed settings.
    """
    parser = argparse.ArgumentParser(
        description="Probes web pages, checks their content with regex assertions "
        "and alerts contacts when checks keep failing."
    )

    parser.add_argument(
        "-iid",
        "--instance-id",
        type=str,
        default=os.getenv("PAGE_WATCH_INSTANCE_ID", f"{DEFAULT_INSTANCE_ID_PREFIX}{uuid4()}"),
        help="Specifies the identifier of this process, added to every log record.\n"
        "If not provided, the value is read from the PAGE_WATCH_INSTANCE_ID environment variable.\n"
        f"If that is also absent, the default value will be {DEFAULT_INSTANCE_ID_PREFIX}uuid4().",
    )

    parser.add_argument(
        "-t",
        "--targets-file",
        type=str,
        default=os.getenv("PAGE_WATCH_TARGETS_FILE", DEFAULT_TARGETS_FILE),
        help="Path to the JSON file listing the monitored targets.\n"
        "If not provided, the value is read from the PAGE_WATCH_TARGETS_FILE environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_TARGETS_FILE} is used.",
    )

    parser.add_argument(
        "-c",
        "--contacts-file",
        type=str,
        default=os.getenv("PAGE_WATCH_CONTACTS_FILE", DEFAULT_CONTACTS_FILE),
        help="Path to the JSON file listing the alert contacts.\n"
        "If not provided, the value is read from the PAGE_WATCH_CONTACTS_FILE environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_CONTACTS_FILE} is used.",
    )

    parser.add_argument(
        "-n",
        "--notifier-file",
        type=str,
        default=os.getenv("PAGE_WATCH_NOTIFIER_FILE", DEFAULT_NOTIFIER_FILE),
        help="Path to the JSON file holding the SMS provider credentials.\n"
        "If not provided, the value is read from the PAGE_WATCH_NOTIFIER_FILE environment variable.\n"
        "If that is also absent, alerts are only written to the log.",
    )

    parser.add_argument(
        "-ts",
        "--tick-seconds",
        type=int,
        default=int(os.getenv("PAGE_WATCH_TICK_SECONDS", DEFAULT_TICK_SECONDS)),
        help="Specifies the duration of one scheduler tick in seconds.\n"
        "Target intervals are expressed in ticks.\n"
        "If not provided, the value is read from the PAGE_WATCH_TICK_SECONDS environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_TICK_SECONDS} is used.",
    )

    parser.add_argument(
        "-da",
        "--dns-attempts",
        type=int,
        default=int(os.getenv("PAGE_WATCH_DNS_ATTEMPTS", DEFAULT_DNS_ATTEMPTS)),
        help="Specifies how many times a DNS lookup is attempted before the target is in error.\n"
        "If not provided, the value is read from the PAGE_WATCH_DNS_ATTEMPTS environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_DNS_ATTEMPTS} is used.",
    )

    parser.add_argument(
        "-lt",
        "--logging-type",
        type=str,
        default=os.getenv("PAGE_WATCH_LOGGING_TYPE", DEFAULT_LOGGING_TYPE),
        help="Specifies the logging configuration type to use.\n"
        "Allowed values: dev, prod, custom (case insensitive).\n"
        "For 'dev' and 'prod', system will use built-in configurations.\n"
        "For 'custom', the --logging-config-file argument is required.",
    )

    parser.add_argument(
        "-lcf",
        "--logging-config-file",
        type=str,
        default=os.getenv("PAGE_WATCH_LOGGING_CONFIG_FILE", DEFAULT_LOGGING_CONFIG_FILE),
        help="Path to custom logging configuration file.\n"
        "Required when --logging-type is set to 'custom'.",
    )

    parser.add_argument(
        "--test-alert",
        type=str,
        default=DEFAULT_TEST_ALERT_ALIAS,
        metavar="ALIAS",
        help="Sends a test alert to the contact with this alias and exits.",
    )

    args: Any = parser.parse_args(argv)

    if args.tick_seconds < 1:
        parser.error("--tick-seconds must be at least 1.")
    if args.dns_attempts < 1:
        parser.error("--dns-attempts must be at least 1.")

    return MonitoringContext(
        instance_id=args.instance_id,
        logging_type=args.logging_type,
        logging_config_file=args.logging_config_file,
        targets_file=args.targets_file,
        contacts_file=args.contacts_file,
        notifier_file=args.notifier_file,
        tick_seconds=args.tick_seconds,
        dns_attempts=args.dns_attempts,
        test_alert=args.test_alert,
    )
