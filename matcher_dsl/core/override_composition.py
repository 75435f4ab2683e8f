"""Override Composition Engine — builds the base/wrapper pair behind every override.

Invariants:
    - One OverrideEntry per method name; the wrapper always holds its base explicitly
    - Arity is decided ONCE, at registration (wants_actual), and cached on the entry
    - match: records actual, ExpectationNotMetError → False, everything else propagates
    - match_when_negated: records actual, no exception conversion
    - match_unless_raises: expected error → rescued_exception + False; no error → True
    - message/description overrides return the base result verbatim
    - chain wrappers discard the base result and return the matcher itself
    - Wrappers never mutate anything but `actual` and `rescued_exception`

Design Decisions:
    - Closure table over runtime class synthesis: an entry is plain data
      (method name, base, wrapper), so an instance's overrides are a dict
    - Wrappers take the matcher as first argument instead of closing over it:
      entries stay independent of the instance they are installed on
    - Variadic bases (*args) count as accepting a parameter and receive actual
"""

import inspect
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable

from matcher_dsl.core.domain_types import ProtocolMethod
from matcher_dsl.core.errors import ExpectationNotMetError

_POSITIONAL_KINDS = frozenset({
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
})


def wants_actual(base: Callable[..., Any]) -> bool:
    """True when `base` declares at least one positional parameter.

    Builtins and C callables without an inspectable signature are assumed
    to want the value.
    """
    try:
        signature = inspect.signature(base)
    except (TypeError, ValueError):
        return True
    return any(p.kind in _POSITIONAL_KINDS for p in signature.parameters.values())


def call_base(base: Callable[..., Any], inject: bool, actual: Any) -> Any:
    """Invoke `base` with `actual` as sole positional argument, or with none."""
    if inject:
        return base(actual)
    return base()


@dataclass(frozen=True)
class OverrideEntry:
    """A compiled override: the user's base and the wrapper that guards it."""
    method_name: str
    base: Callable[..., Any] | None
    wrapper: Callable[..., Any]
    wants_actual: bool = False

    def bind(self, matcher: Any) -> Callable[..., Any]:
        """Bind the wrapper to one matcher, ready to be called like a method."""
        return partial(self.wrapper, matcher)


# ─── Predicate overrides ────────────────────────────────────────

def compose_match(base: Callable[..., Any]) -> OverrideEntry:
    """`matches` override: nested expectation failures count as a non-match."""
    inject = wants_actual(base)

    def wrapper(matcher: Any, actual: Any) -> bool:
        matcher.actual = actual
        try:
            return bool(call_base(base, inject, actual))
        except ExpectationNotMetError:
            return False

    return OverrideEntry(ProtocolMethod.MATCHES.value, base, wrapper, inject)


def compose_match_when_negated(base: Callable[..., Any]) -> OverrideEntry:
    """`does_not_match` override: errors propagate unconverted."""
    inject = wants_actual(base)

    def wrapper(matcher: Any, actual: Any) -> bool:
        matcher.actual = actual
        return bool(call_base(base, inject, actual))

    return OverrideEntry(ProtocolMethod.DOES_NOT_MATCH.value, base, wrapper, inject)


def compose_match_unless_raises(
    base: Callable[..., Any],
    expected_exception: type[BaseException] | tuple[type[BaseException], ...] = Exception,
) -> OverrideEntry:
    """`matches` override that passes iff the base completes without raising.

    Only `expected_exception` is rescued (and kept on the matcher as
    `rescued_exception`); any other error propagates.
    """
    inject = wants_actual(base)

    def wrapper(matcher: Any, actual: Any) -> bool:
        matcher.actual = actual
        try:
            call_base(base, inject, actual)
        except expected_exception as exc:
            matcher.rescued_exception = exc
            return False
        return True

    return OverrideEntry(ProtocolMethod.MATCHES.value, base, wrapper, inject)


# ─── Message overrides ──────────────────────────────────────────

def compose_message(
    method: ProtocolMethod, base: Callable[..., Any],
) -> OverrideEntry:
    """description / failure_message / failure_message_when_negated override."""
    inject = wants_actual(base)

    def wrapper(matcher: Any) -> Any:
        return call_base(base, inject, matcher.actual)

    return OverrideEntry(method.value, base, wrapper, inject)


def compose_diffable() -> OverrideEntry:
    """Constant-True `is_diffable`; there is no user base to wrap."""

    def wrapper(matcher: Any) -> bool:
        return True

    return OverrideEntry(ProtocolMethod.DIFFABLE.value, None, wrapper, False)


# ─── Fluent interface ───────────────────────────────────────────

def compose_chain(name: str, base: Callable[..., Any]) -> OverrideEntry:
    """Fluent method: forward every argument to base, always return the matcher."""

    def wrapper(matcher: Any, *args: Any, **kwargs: Any) -> Any:
        base(*args, **kwargs)
        return matcher

    return OverrideEntry(name, base, wrapper, False)
