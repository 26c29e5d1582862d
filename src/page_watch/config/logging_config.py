"""
Logging configuration module for the page monitoring system.

Logging is configured through logging.config.dictConfig from a JSON file:
one of the built-in 'dev' and 'prod' files shipped with this package, or a
custom file given on the command line. Every record is stamped with the
instance id so that several monitoring processes can share a log sink.
"""

import json
import logging.config
import os
from typing import Any, Dict

from page_watch.config import MonitoringContext
from page_watch.exceptions import ConfigurationError

BUILT_IN_CONFIGS: Dict[str, str] = {
    "dev": "logging-config-dev.json",
    "prod": "logging-config-prod.json",
}


def configure_logging(context: MonitoringContext) -> None:
    """
    Configure logging for the application based on the provided configuration.

    Args:
        context: Configuration context containing logging settings.

    Raises:
        ConfigurationError: If the logging type is unknown, if 'custom' is used
            without a file, or if the configuration file cannot be applied.
    """
    logging_type: str = context.logging_type.lower()

    if logging_type in BUILT_IN_CONFIGS:
        config_file = _get_local_package_file_path(BUILT_IN_CONFIGS[logging_type])
    elif logging_type == "custom":
        if not context.logging_config_file:
            raise ConfigurationError("Custom logging configuration file must be provided.")
        config_file = context.logging_config_file
    else:
        raise ConfigurationError(
            f"Invalid logging type: '{context.logging_type}'. Allowed values are: dev, prod, custom"
        )

    _load_logging_config(config_file)

    # The filter goes on the handlers so that records of child loggers are stamped too
    instance_filter = _InstanceIdFilter(instance_id=context.instance_id)
    for handler in logging.getLogger().handlers:
        handler.addFilter(instance_filter)

    logging.getLogger(__name__).debug(f"Logging configured from {config_file}.")


def _load_logging_config(config_file: str) -> None:
    """
    Load a dictConfig logging configuration from a JSON file.

    Raises:
        ConfigurationError: If the file is missing, is not valid JSON, or is
            rejected by dictConfig.
    """
    try:
        with open(config_file) as f:
            config: Dict[str, Any] = json.load(f)
    except FileNotFoundError as err:
        raise ConfigurationError(f"Logging config file not found: {config_file}") from err
    except json.JSONDecodeError as err:
        raise ConfigurationError(
            f"Invalid JSON format in logging config file: {config_file}"
        ) from err

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as err:
        raise ConfigurationError(f"Error loading logging config: {err}") from err


def _get_local_package_file_path(config_file: str) -> str:
    return os.path.join(os.path.dirname(__file__), config_file)


class _InstanceIdFilter(logging.Filter):
    """
    A logging filter that injects the instance id into every log record.

    Formatters can then use '%(instance_id)s'.
    """

    def __init__(self, instance_id: str) -> None:
        super().__init__()
        self._instance_id: str = instance_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.instance_id = self._instance_id
        return True
