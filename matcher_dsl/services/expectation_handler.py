"""Expectation Handler — minimal driver for the matcher protocol.

Invariants:
    - to() passes iff matcher.matches(actual) is truthy
    - not_to() prefers matcher.does_not_match(actual); falls back to `not matches`
    - Failures raise ExpectationNotMetError carrying the matcher's failure message
    - A custom message (str or zero-arg callable) replaces the matcher's message

Design Decisions:
    - Raise, don't return: inside a `match` block a failed nested expectation
      surfaces as ExpectationNotMetError, which the match wrapper turns into False
    - Diff rendering stays out: diffable matchers only get expected/actual lines
"""

import logging
from typing import Any, Callable

from matcher_dsl.core.errors import ExpectationNotMetError

logger = logging.getLogger(__name__)

Message = str | Callable[[], str] | None


def _render(custom: Message, fallback: Callable[[], str]) -> str:
    if custom is None:
        return fallback()
    if callable(custom):
        return custom()
    return custom


def _with_diff(matcher: Any, message: str, actual: Any) -> str:
    is_diffable = getattr(matcher, "is_diffable", None)
    if not callable(is_diffable) or not is_diffable():
        return message
    expected = getattr(matcher, "expected", None)
    return f"{message}\nExpected: {expected!r}\n     Got: {actual!r}"


class ExpectationTarget:
    """Wraps the value under test; `to`/`not_to` apply a matcher to it."""

    def __init__(self, actual: Any):
        self.actual = actual

    def to(self, matcher: Any, message: Message = None) -> bool:
        if matcher.matches(self.actual):
            return True
        self._fail(matcher, _render(message, matcher.failure_message))

    def not_to(self, matcher: Any, message: Message = None) -> bool:
        does_not_match = getattr(matcher, "does_not_match", None)
        if callable(does_not_match):
            passed = does_not_match(self.actual)
        else:
            passed = not matcher.matches(self.actual)
        if passed:
            return True
        self._fail(matcher, _render(message, matcher.failure_message_when_negated))

    to_not = not_to

    def _fail(self, matcher: Any, message: str) -> None:
        name = getattr(matcher, "name", None)
        error = ExpectationNotMetError(
            _with_diff(matcher, message, self.actual),
            name if isinstance(name, str) else None,
        )
        logger.debug(
            f"Expectation not met: {message}",
            extra={
                "matcher_name": error.context.matcher_name,
                "error_code": error.code,
                "error": error.to_dict()["error"],
            },
        )
        raise error


def expect(actual: Any) -> ExpectationTarget:
    return ExpectationTarget(actual)
