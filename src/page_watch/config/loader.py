"""
Loading and validation of the target, contact and notifier files.

All three files are JSON. Anything that would make the monitor misbehave
later (an empty list, an interval of zero, a regex that does not compile, a
malformed URL, incomplete SMS credentials) is rejected here with a
ConfigurationError so that the process stops at startup.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from yarl import URL

from page_watch.domain import Assertion, Contact, Target
from page_watch.exceptions import ConfigurationError
from page_watch.notifier.plivo_notifier import PlivoSettings

# Module logger
logger = logging.getLogger(__name__)

ALLOWED_URL_SCHEMES = ("http", "https")


def _read_json(path: str, what: str) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except OSError as err:
        raise ConfigurationError(f"Unable to open {what} file '{path}': {err}") from err
    except json.JSONDecodeError as err:
        raise ConfigurationError(f"{what.capitalize()} file '{path}' appears invalid: {err}") from err


def _get_str(record: Dict[str, Any], key: str, where: str, required: bool = False) -> str:
    value = record.get(key, "")
    if not isinstance(value, str):
        raise ConfigurationError(f"{where}: '{key}' must be a string.")
    if required and not value:
        raise ConfigurationError(f"{where}: '{key}' is required.")
    return value


def _get_bool(record: Dict[str, Any], key: str, where: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{where}: '{key}' must be true or false.")
    return value


def _get_int(
    record: Dict[str, Any],
    key: str,
    where: str,
    default: Optional[int] = 0,
    minimum: Optional[int] = None,
) -> int:
    value = record.get(key, default)
    if value is None:
        raise ConfigurationError(f"{where}: '{key}' is required.")
    # bool is a subclass of int and is never a valid number here
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{where}: '{key}' must be an integer.")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{where}: '{key}' must be at least {minimum}, got {value}.")
    return value


def _as_object(record: Any, where: str) -> Dict[str, Any]:
    if not isinstance(record, dict):
        raise ConfigurationError(f"{where}: expected a JSON object.")
    return record


def validate_url(url: str, where: str) -> None:
    """
    Rejects URLs that cannot be probed.

    An empty URL is accepted: such a target is never probed.

    Raises:
        ConfigurationError: If the URL is not an absolute http(s) URL with a host
            that can be looked up.
    """
    if not url:
        return
    try:
        parsed = URL(url)
    except (ValueError, TypeError) as err:
        raise ConfigurationError(f"{where}: invalid url '{url}': {err}") from err
    if parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.host:
        raise ConfigurationError(
            f"{where}: invalid url '{url}', expected an absolute http or https url."
        )
    try:
        parsed.host.encode("idna")
    except UnicodeError as err:
        raise ConfigurationError(f"{where}: invalid host in url '{url}': {err}") from err


def validate_regex(regex: str, where: str) -> None:
    """
    Raises:
        ConfigurationError: If a non-empty pattern does not compile.
    """
    if not regex:
        return
    try:
        re.compile(regex)
    except re.error as err:
        raise ConfigurationError(f"{where}: invalid regex '{regex}': {err}") from err


def _parse_assertion(record: Any, where: str) -> Assertion:
    record = _as_object(record, where)
    assertion = Assertion(
        alias=_get_str(record, "alias", where),
        regex=_get_str(record, "regex", where),
        exists=_get_bool(record, "exists", where),
        missing=_get_bool(record, "missing", where),
        max_value=_get_int(record, "max", where),
        min_value=_get_int(record, "min", where),
    )
    validate_regex(assertion.regex, where)
    return assertion


def _parse_assertions(record: Dict[str, Any], key: str, where: str) -> List[Assertion]:
    records = record.get(key, [])
    if records is None:
        return []
    if not isinstance(records, list):
        raise ConfigurationError(f"{where}: '{key}' must be a list.")
    return [
        _parse_assertion(item, f"{where} {key}[{position}]")
        for position, item in enumerate(records)
    ]


def parse_target(record: Any, where: str) -> Target:
    """
    Builds a Target from a decoded JSON object.

    Raises:
        ConfigurationError: If any field is missing or invalid.
    """
    record = _as_object(record, where)
    alias = _get_str(record, "alias", where, required=True)
    where = f"{where} '{alias}'"

    target = Target(
        alias=alias,
        url=_get_str(record, "url", where),
        interval=_get_int(record, "interval", where, default=None, minimum=1),
        alert_class=_get_int(record, "class", where),
        threshold=_get_int(record, "threshold", where, default=1, minimum=1),
        errors=_parse_assertions(record, "errors", where),
        warnings=_parse_assertions(record, "warnings", where),
    )
    validate_url(target.url, where)
    return target


def parse_contact(record: Any, where: str) -> Contact:
    """
    Builds a Contact from a decoded JSON object.

    Raises:
        ConfigurationError: If any field is missing or invalid.
    """
    record = _as_object(record, where)
    alias = _get_str(record, "alias", where, required=True)
    where = f"{where} '{alias}'"
    return Contact(
        alias=alias,
        phone=_get_str(record, "phone", where),
        email=_get_str(record, "email", where),
        class_mask=_get_int(record, "class_mask", where),
    )


def load_targets(path: str) -> List[Target]:
    """
    Loads the list of monitored targets.

    Args:
        path: Path to the JSON file.

    Returns:
        List[Target]: The targets in file order.

    Raises:
        ConfigurationError: If the file is unreadable or invalid, if it holds
            no target, or if two targets share an alias.
    """
    records = _read_json(path, "targets")
    if not isinstance(records, list):
        raise ConfigurationError(f"Targets file '{path}' must contain a JSON list.")
    if not records:
        raise ConfigurationError(f"Targets file '{path}' must contain at least one target.")

    targets = [parse_target(record, f"target[{position}]") for position, record in enumerate(records)]

    seen = set()
    for target in targets:
        if target.alias in seen:
            raise ConfigurationError(f"Duplicate target alias '{target.alias}'.")
        seen.add(target.alias)

    logger.info(f"Loaded {len(targets)} targets from {path}")
    return targets


def load_contacts(path: str) -> List[Contact]:
    """
    Loads the list of alert contacts.

    Args:
        path: Path to the JSON file.

    Returns:
        List[Contact]: The contacts in file order.

    Raises:
        ConfigurationError: If the file is unreadable or invalid, or if it
            holds no contact.
    """
    records = _read_json(path, "contacts")
    if not isinstance(records, list):
        raise ConfigurationError(f"Contacts file '{path}' must contain a JSON list.")
    if not records:
        raise ConfigurationError(f"Contacts file '{path}' must contain at least one contact.")

    contacts = [
        parse_contact(record, f"contact[{position}]") for position, record in enumerate(records)
    ]
    logger.info(f"Loaded {len(contacts)} contacts from {path}")
    return contacts


def load_notifier_settings(path: str) -> Optional[PlivoSettings]:
    """
    Loads the SMS provider credentials.

    Args:
        path: Path to the JSON file, or an empty string when SMS delivery is
            not configured.

    Returns:
        Optional[PlivoSettings]: The credentials, or None when no file is given.

    Raises:
        ConfigurationError: If the file is unreadable or a credential is missing.
    """
    if not path:
        return None

    config = _as_object(_read_json(path, "notifier"), f"Notifier file '{path}'")
    if "plivo" not in config:
        raise ConfigurationError(f"Notifier file '{path}' has no 'plivo' section.")

    where = f"Notifier file '{path}' plivo"
    plivo = _as_object(config["plivo"], where)
    return PlivoSettings(
        auth_id=_get_str(plivo, "auth_id", where, required=True),
        token=_get_str(plivo, "token", where, required=True),
        number=_get_str(plivo, "number", where, required=True),
    )
