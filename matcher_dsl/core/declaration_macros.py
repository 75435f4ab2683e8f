"""Declaration Macros — the scope a declaration procedure runs against.

A declaration procedure is a plain function taking the scope plus the
expected values passed to the matcher constructor:

    def be_within(dsl, delta, expected):
        @dsl.match
        def _(actual):
            return abs(actual - expected) <= delta

        @dsl.chain("percent_of")
        def _(value):
            ...

Blocks share state through closures (`nonlocal`) or through attributes on
`dsl.matcher`; an attribute must not reuse the name of a chained method,
since instance attributes win over chained lookup.

Invariants:
    - Every registration op installs exactly one OverrideEntry on the bound matcher
    - Re-registering a method replaces the previous entry for THIS instance only
    - Registration ops return the user function, so they stack as decorators
    - chain() names are validated before installation

Design Decisions:
    - Separate scope object over evaluating inside the matcher: registration
      `description(fn)` and protocol `description()` never share a namespace
    - Decorator-or-call signatures: `@dsl.match` and `dsl.match(fn)` are equivalent
"""

import keyword
from typing import Any, Callable, TypeVar

from matcher_dsl.core.errors import InvalidChainNameError
from matcher_dsl.core.domain_types import ProtocolMethod
from matcher_dsl.core.override_composition import (
    OverrideEntry,
    compose_chain,
    compose_diffable,
    compose_match,
    compose_match_unless_raises,
    compose_match_when_negated,
    compose_message,
)

F = TypeVar("F", bound=Callable[..., Any])

ExceptionSpec = type[BaseException] | tuple[type[BaseException], ...]


def is_exception_spec(value: object) -> bool:
    """True for an exception class or a tuple of exception classes."""
    if isinstance(value, tuple):
        return len(value) > 0 and all(is_exception_spec(v) for v in value)
    return isinstance(value, type) and issubclass(value, BaseException)


def is_valid_chain_name(name: object) -> bool:
    return (
        isinstance(name, str)
        and name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith("_")
    )


class MatcherDSL:
    """Registration operations plus read access to the matcher being declared."""

    def __init__(self, matcher: Any):
        self._matcher = matcher

    # ─── Instance state ──────────────────────────────────────────

    @property
    def matcher(self) -> Any:
        return self._matcher

    @property
    def name(self) -> str:
        return self._matcher.name

    @property
    def actual(self) -> Any:
        return self._matcher.actual

    @property
    def expected(self) -> Any:
        return self._matcher.expected

    @property
    def expected_as_array(self) -> tuple:
        return self._matcher.expected_as_array

    @property
    def rescued_exception(self) -> BaseException | None:
        return self._matcher.rescued_exception

    @property
    def defaults(self) -> Any:
        """The layer beneath any override (e.g. `dsl.defaults.description()`)."""
        return self._matcher.defaults

    # ─── Registration ops ────────────────────────────────────────

    def _install(self, entry: OverrideEntry) -> None:
        self._matcher.install_override(entry)

    def match(self, fn: F) -> F:
        """Pass/fail rule for positive expectations."""
        self._install(compose_match(fn))
        return fn

    def match_when_negated(self, fn: F) -> F:
        """Rule for negative expectations when it is not simply `not match`."""
        self._install(compose_match_when_negated(fn))
        return fn

    def match_unless_raises(
        self,
        expected_exception: ExceptionSpec | Callable[..., Any] = Exception,
        fn: Callable[..., Any] | None = None,
    ) -> Any:
        """Pass unless the block raises `expected_exception`.

        Usable as `@dsl.match_unless_raises`, `@dsl.match_unless_raises(Error)`
        or `dsl.match_unless_raises(Error, fn)`.
        """
        if fn is None and not is_exception_spec(expected_exception):
            fn, expected_exception = expected_exception, Exception

        def register(block: F) -> F:
            self._install(compose_match_unless_raises(block, expected_exception))
            return block

        if fn is None:
            return register
        return register(fn)

    def failure_message(self, fn: F) -> F:
        self._install(compose_message(ProtocolMethod.FAILURE_MESSAGE, fn))
        return fn

    def failure_message_when_negated(self, fn: F) -> F:
        self._install(
            compose_message(ProtocolMethod.FAILURE_MESSAGE_WHEN_NEGATED, fn),
        )
        return fn

    def description(self, fn: F) -> F:
        self._install(compose_message(ProtocolMethod.DESCRIPTION, fn))
        return fn

    def diffable(self) -> None:
        """Ask the expectation engine to diff actual against expected."""
        self._install(compose_diffable())

    def chain(self, name: str, fn: Callable[..., Any] | None = None) -> Any:
        """Add a fluent method `name` that always returns the matcher."""
        if not is_valid_chain_name(name) or self._matcher.is_reserved_name(name):
            raise InvalidChainNameError(self._matcher.name, str(name))

        def register(block: F) -> F:
            self._install(compose_chain(name, block))
            return block

        if fn is None:
            return register
        return register(fn)
