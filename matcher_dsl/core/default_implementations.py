"""Default Implementation Set — baseline protocol behavior when no override is declared.

Invariants:
    - is_diffable() is False unless the declaration registered `diffable`
    - description() is built from name + expected values only, never from overrides
    - failure messages embed the inspected actual and the default sentence
    - does_not_match() is the negation of the instance's (possibly overridden) matches()
    - matches() has no baseline: it is delegated to the execution context or fails;
      a delegated result is coerced to bool

Design Decisions:
    - Bound defaults object over a mixin: overrides reach the layer beneath
      explicitly (`dsl.defaults.failure_message()`) instead of via super()
    - Reads matcher state through MatcherLike so this module never imports Matcher
"""

from typing import Any, Protocol, Sequence

from matcher_dsl.core.collaborator_protocols import ExecutionContext, PrettyPrinter
from matcher_dsl.core.delegation_fallback import resolve_fallback
from matcher_dsl.core.domain_types import ProtocolMethod


class MatcherLike(Protocol):
    """The slice of Matcher state the defaults read."""
    name: str
    expected_as_array: tuple
    actual: Any
    printer: PrettyPrinter
    context: ExecutionContext

    def matches(self, actual: Any) -> bool: ...


def default_sentence(printer: PrettyPrinter, name: str, expected: Sequence[Any]) -> str:
    """`be_within`, (0.1,) → `be within 0.1`."""
    return f"{printer.name_to_sentence(name)}{printer.to_sentence(expected)}"


class DefaultImplementations:
    """Protocol defaults bound to one matcher instance."""

    def __init__(self, matcher: MatcherLike):
        self._matcher = matcher

    def _sentence(self) -> str:
        m = self._matcher
        return default_sentence(m.printer, m.name, m.expected_as_array)

    def matches(self, actual: Any) -> bool:
        m = self._matcher
        forward = resolve_fallback(m.name, m.context, ProtocolMethod.MATCHES.value)
        return bool(forward(actual))

    def does_not_match(self, actual: Any) -> bool:
        return not self._matcher.matches(actual)

    def is_diffable(self) -> bool:
        return False

    def description(self) -> str:
        return self._sentence()

    def failure_message(self) -> str:
        actual = self._matcher.printer.inspect(self._matcher.actual)
        return f"expected {actual} to {self._sentence()}"

    def failure_message_when_negated(self) -> str:
        actual = self._matcher.printer.inspect(self._matcher.actual)
        return f"expected {actual} not to {self._sentence()}"
