"""
Constants for the page monitoring system.

This module defines default values for all configurable parameters of the
monitoring system. These constants are used as fallback values when neither
command-line arguments nor environment variables are provided.
"""

# Input files
DEFAULT_TARGETS_FILE = "targets.json"
DEFAULT_CONTACTS_FILE = "contacts.json"
DEFAULT_NOTIFIER_FILE = ""

# Scheduling defaults
DEFAULT_TICK_SECONDS = 60
DEFAULT_DNS_ATTEMPTS = 3

# URLs shorter than this are not probed
MIN_URL_LENGTH = 4

# Instance configuration defaults
DEFAULT_INSTANCE_ID_PREFIX = "page-watch-"

# Manual alert
DEFAULT_TEST_ALERT_ALIAS = ""
TEST_ALERT_MESSAGE = "This is a test alert sent from page-watch"

# HTTP configuration defaults
DEFAULT_USER_AGENT = "page-watch"

# Logging configuration defaults
DEFAULT_LOGGING_TYPE = "prod"
DEFAULT_LOGGING_CONFIG_FILE = ""
