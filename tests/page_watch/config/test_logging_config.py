"""
Unit tests for the logging configuration module.

The tests follow the Arrange-Act-Assert (AAA) pattern and mock dictConfig
where the global logging state would otherwise be changed.
"""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from page_watch.config.logging_config import (
    BUILT_IN_CONFIGS,
    _get_local_package_file_path,
    _InstanceIdFilter,
    _load_logging_config,
    configure_logging,
)
from page_watch.config.monitoring_context import MonitoringContext
from page_watch.exceptions import ConfigurationError


def make_context(logging_type: str, logging_config_file: str = "") -> MonitoringContext:
    return MonitoringContext(
        instance_id="test-instance",
        logging_type=logging_type,
        logging_config_file=logging_config_file,
        targets_file="targets.json",
        contacts_file="contacts.json",
        notifier_file="",
        tick_seconds=60,
        dns_attempts=3,
        test_alert="",
    )


@pytest.mark.parametrize("logging_type", ["dev", "prod", "DEV"])
def test_configure_logging_should_load_built_in_files(logging_type: str) -> None:
    # Arrange
    expected = _get_local_package_file_path(BUILT_IN_CONFIGS[logging_type.lower()])

    # Act
    with patch("page_watch.config.logging_config._load_logging_config") as mock_load:
        configure_logging(make_context(logging_type))

    # Assert
    mock_load.assert_called_once_with(expected)


@pytest.mark.parametrize("name", sorted(BUILT_IN_CONFIGS.values()))
def test_built_in_files_should_be_valid_dict_configs(name: str) -> None:
    # Arrange
    with open(_get_local_package_file_path(name)) as f:
        config = json.load(f)

    # Assert
    assert config["version"] == 1
    assert "console" in config["handlers"]
    assert "%(instance_id)s" in next(iter(config["formatters"].values()))["format"]


def test_configure_logging_should_load_custom_file() -> None:
    # Act
    with patch("page_watch.config.logging_config._load_logging_config") as mock_load:
        configure_logging(make_context("custom", "/etc/watch/logging.json"))

    # Assert
    mock_load.assert_called_once_with("/etc/watch/logging.json")


def test_configure_logging_should_require_custom_file() -> None:
    with pytest.raises(ConfigurationError, match="must be provided"):
        configure_logging(make_context("custom"))


def test_configure_logging_should_reject_unknown_type() -> None:
    with pytest.raises(ConfigurationError, match="Invalid logging type"):
        configure_logging(make_context("verbose"))


def test_load_logging_config_should_reject_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        _load_logging_config(str(tmp_path / "missing.json"))


def test_load_logging_config_should_reject_invalid_json(tmp_path: Path) -> None:
    # Arrange
    path = tmp_path / "logging.json"
    path.write_text("{version: 1")

    # Act / Assert
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        _load_logging_config(str(path))


def test_load_logging_config_should_reject_invalid_dict_config(tmp_path: Path) -> None:
    # Arrange
    path = tmp_path / "logging.json"
    path.write_text(json.dumps({"version": 99}))

    # Act / Assert
    with pytest.raises(ConfigurationError, match="Error loading logging config"):
        _load_logging_config(str(path))


def test_instance_id_filter_should_stamp_records() -> None:
    # Arrange
    record = logging.LogRecord("page_watch", logging.INFO, __file__, 1, "hello", None, None)

    # Act
    result = _InstanceIdFilter("watch-1").filter(record)

    # Assert
    assert result is True
    assert record.instance_id == "watch-1"
