"""
Unit tests for the configuration module's initialization.

This module checks that get_context parses command-line arguments and
environment variables into a MonitoringContext.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

from unittest.mock import patch

import pytest

from page_watch.config import get_context
from page_watch.config.monitoring_context import MonitoringContext

ENV_VARIABLES = (
    "PAGE_WATCH_INSTANCE_ID",
    "PAGE_WATCH_TARGETS_FILE",
    "PAGE_WATCH_CONTACTS_FILE",
    "PAGE_WATCH_NOTIFIER_FILE",
    "PAGE_WATCH_TICK_SECONDS",
    "PAGE_WATCH_DNS_ATTEMPTS",
    "PAGE_WATCH_LOGGING_TYPE",
    "PAGE_WATCH_LOGGING_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Removes every PAGE_WATCH_* variable so that defaults are predictable."""
    for name in ENV_VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_get_context_should_return_context_with_default_values() -> None:
    # Arrange
    with patch("page_watch.config.uuid4", return_value="mock-uuid"):
        # Act
        context = get_context([])

    # Assert
    assert context == MonitoringContext(
        instance_id="page-watch-mock-uuid",
        logging_type="prod",
        logging_config_file="",
        targets_file="targets.json",
        contacts_file="contacts.json",
        notifier_file="",
        tick_seconds=60,
        dns_attempts=3,
        test_alert="",
    )


def test_get_context_should_use_command_line_arguments() -> None:
    # Act
    context = get_context(
        [
            "--instance-id", "watch-1",
            "--targets-file", "/etc/watch/targets.json",
            "--contacts-file", "/etc/watch/contacts.json",
            "--notifier-file", "/etc/watch/notifier.json",
            "--tick-seconds", "30",
            "--dns-attempts", "5",
            "--logging-type", "custom",
            "--logging-config-file", "/etc/watch/logging.json",
            "--test-alert", "oncall",
        ]
    )

    # Assert
    assert context == MonitoringContext(
        instance_id="watch-1",
        logging_type="custom",
        logging_config_file="/etc/watch/logging.json",
        targets_file="/etc/watch/targets.json",
        contacts_file="/etc/watch/contacts.json",
        notifier_file="/etc/watch/notifier.json",
        tick_seconds=30,
        dns_attempts=5,
        test_alert="oncall",
    )


def test_get_context_should_fall_back_to_environment_variables(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # Arrange
    monkeypatch.setenv("PAGE_WATCH_INSTANCE_ID", "env-watch")
    monkeypatch.setenv("PAGE_WATCH_TARGETS_FILE", "env-targets.json")
    monkeypatch.setenv("PAGE_WATCH_TICK_SECONDS", "15")
    monkeypatch.setenv("PAGE_WATCH_LOGGING_TYPE", "dev")

    # Act
    context = get_context([])

    # Assert
    assert context.instance_id == "env-watch"
    assert context.targets_file == "env-targets.json"
    assert context.tick_seconds == 15
    assert context.logging_type == "dev"


def test_command_line_should_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    # Arrange
    monkeypatch.setenv("PAGE_WATCH_TICK_SECONDS", "15")

    # Act
    context = get_context(["--tick-seconds", "120"])

    # Assert
    assert context.tick_seconds == 120


@pytest.mark.parametrize("argv", [["--tick-seconds", "0"], ["--dns-attempts", "0"]])
def test_get_context_should_reject_non_positive_values(argv) -> None:
    with pytest.raises(SystemExit):
        get_context(argv)
