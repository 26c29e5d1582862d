"""
Regex assertion evaluation for response bodies.

An assertion either checks for the presence or absence of a pattern
(existence mode) or extracts an integer from the first capture group of the
first match and compares it against a range (range mode). Assertions of a
target are evaluated in order and the first failure wins.
"""

import re
from typing import Iterable, Optional

from page_watch.domain import Assertion
from page_watch.exceptions import AssertionFailure

# Optional sign followed by decimal digits, nothing else.
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or not _INTEGER.fullmatch(value):
        return None
    return int(value)


def evaluate(assertion: Assertion, body: str) -> None:
    """
    Checks a response body against a single assertion.

    Args:
        assertion: The assertion to apply.
        body: The decoded response body.

    Raises:
        AssertionFailure: When the body violates the assertion. The message
            is the detail reported in the outcome.
    """
    if not assertion.regex:
        return

    if not body:
        raise AssertionFailure(f"{assertion.alias}: no content returned")

    match = re.search(assertion.regex, body)

    if assertion.existence_mode:
        if assertion.exists and match is not None:
            raise AssertionFailure(f"{assertion.alias}: exists: {assertion.regex}")
        if assertion.missing and match is None:
            raise AssertionFailure(f"{assertion.alias}: missing '{assertion.regex}'")
        return

    if match is None:
        # a number was expected but the pattern did not match at all
        raise AssertionFailure(
            f"{assertion.alias}: regex error, could not parse, '{assertion.regex}'"
        )

    groups = match.groups()
    value = _parse_int(groups[0]) if groups else None
    if value is None:
        return

    if value > assertion.max_value:
        raise AssertionFailure(
            f"{assertion.alias} value {value} exceeds limit {assertion.max_value}"
        )
    if value < assertion.min_value:
        raise AssertionFailure(
            f"{assertion.alias} value {value} below limit {assertion.min_value}"
        )


def first_failure(assertions: Iterable[Assertion], body: str) -> Optional[AssertionFailure]:
    """
    Evaluates assertions in order and stops at the first one that fails.

    Args:
        assertions: The assertions of one class (errors or warnings) of a target.
        body: The decoded response body.

    Returns:
        Optional[AssertionFailure]: The first failure, or None if all passed.
    """
    for assertion in assertions:
        try:
            evaluate(assertion, body)
        except AssertionFailure as failure:
            return failure
    return None
