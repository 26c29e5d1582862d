"""
Configuration context for the page monitoring system.

This module defines a data structure that holds all configuration parameters
for the monitoring system. It serves as a central point for passing configuration
throughout the application.
"""

from typing import NamedTuple


class MonitoringContext(NamedTuple):
    """
    A data structure containing all configuration parameters for the monitoring system.

    This class is immutable and is created by parsing command-line arguments
    and environment variables.

    Attributes:
        instance_id: Identifier of this process, stamped on every log record.
        logging_type: Type of logging configuration to use (dev, prod, or custom).
        logging_config_file: Path to custom logging configuration file (if logging_type is 'custom').
        targets_file: Path to the JSON list of monitored targets.
        contacts_file: Path to the JSON list of alert contacts.
        notifier_file: Path to the JSON notifier credentials, empty to only log alerts.
        tick_seconds: Duration of one scheduler tick in seconds.
        dns_attempts: Total number of DNS lookup attempts per probe.
        test_alert: Contact alias to send a test alert to instead of monitoring, or empty.
    """

    instance_id: str
    logging_type: str
    logging_config_file: str
    targets_file: str
    contacts_file: str
    notifier_file: str
    tick_seconds: int
    dns_attempts: int
    test_alert: str
