"""Matcher — per-use-site instance and the builder that declares it.

Invariants:
    - name and expected_as_array never change after construction
    - The declaration procedure runs exactly once, synchronously, inside build_matcher()
    - Protocol lookup is layered: override wrapper → (its base) → default implementation
    - actual / rescued_exception are written only by protocol wrappers
    - state: DECLARED after build, EVALUATED after matches/does_not_match,
      ERRORED if evaluation raised (the error is re-raised unchanged)
    - Unknown public attributes resolve to chained methods, then to the
      execution context, then fail with MethodNotUnderstood

Design Decisions:
    - One concrete class, per-instance override dict: no per-instance subclasses,
      no singleton-class tricks (ADR: overrides are data, not types)
    - __getattr__ only runs after normal lookup fails, so the fixed protocol
      surface can never be shadowed by a chain or by the context
    - Declaration failures are wrapped in DeclarationError with the cause chained:
      the caller learns WHICH matcher failed without losing the original traceback
"""

from typing import Any, Callable, Sequence

from matcher_dsl.core.collaborator_protocols import (
    ExecutionContext,
    PrettyPrinter,
    as_execution_context,
)
from matcher_dsl.core.declaration_macros import MatcherDSL
from matcher_dsl.core.default_implementations import DefaultImplementations
from matcher_dsl.core.delegation_fallback import context_supports, resolve_fallback
from matcher_dsl.core.domain_types import MatcherState, ProtocolMethod
from matcher_dsl.core.errors import DeclarationError
from matcher_dsl.core.format_sentence import SentencePrinter
from matcher_dsl.core.override_composition import OverrideEntry


class Matcher:
    """A configured matcher instance, built from a declaration for one use."""

    def __init__(
        self,
        name: str,
        expected: Sequence[Any] = (),
        context: object = None,
        printer: PrettyPrinter | None = None,
    ):
        self.name = name
        self.expected_as_array = tuple(expected)
        self.actual: Any = None
        self.rescued_exception: BaseException | None = None
        self.context: ExecutionContext = as_execution_context(context)
        self.printer: PrettyPrinter = printer or SentencePrinter()
        self.state = MatcherState.DECLARED
        self.defaults = DefaultImplementations(self)
        self._overrides: dict[str, OverrideEntry] = {}

    @property
    def expected(self) -> Any:
        """The single expected value, or all of them when there are 0 or 2+."""
        if len(self.expected_as_array) == 1:
            return self.expected_as_array[0]
        return self.expected_as_array

    # ─── Override table ──────────────────────────────────────────

    def install_override(self, entry: OverrideEntry) -> None:
        """Install (or replace) the override for entry.method_name. Used by MatcherDSL."""
        self._overrides[entry.method_name] = entry

    def overridden(self, method_name: str) -> bool:
        return method_name in self._overrides

    def is_reserved_name(self, name: str) -> bool:
        """Names a chain may not take: the fixed surface and instance attributes."""
        return hasattr(type(self), name) or name in self.__dict__

    def _resolve(self, method: ProtocolMethod) -> Callable[..., Any]:
        entry = self._overrides.get(method.value)
        if entry is not None:
            return entry.bind(self)
        return getattr(self.defaults, method.value)

    def _evaluate(self, method: ProtocolMethod, actual: Any) -> bool:
        try:
            result = self._resolve(method)(actual)
        except Exception:
            self.state = MatcherState.ERRORED
            raise
        self.state = MatcherState.EVALUATED
        return result

    # ─── Protocol surface ────────────────────────────────────────

    def matches(self, actual: Any) -> bool:
        return self._evaluate(ProtocolMethod.MATCHES, actual)

    def does_not_match(self, actual: Any) -> bool:
        return self._evaluate(ProtocolMethod.DOES_NOT_MATCH, actual)

    def description(self) -> str:
        return self._resolve(ProtocolMethod.DESCRIPTION)()

    def failure_message(self) -> str:
        return self._resolve(ProtocolMethod.FAILURE_MESSAGE)()

    def failure_message_when_negated(self) -> str:
        return self._resolve(ProtocolMethod.FAILURE_MESSAGE_WHEN_NEGATED)()

    def is_diffable(self) -> bool:
        return self._resolve(ProtocolMethod.DIFFABLE)()

    # ─── Delegation ──────────────────────────────────────────────

    def responds_to(self, name: str) -> bool:
        """True if `name` is public surface, a chained method, or delegable."""
        if name.startswith("_"):
            return False
        if hasattr(type(self), name) or name in self._overrides:
            return True
        return context_supports(self.context, name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        # Partially constructed instance (e.g. during copy/unpickle)
        overrides = self.__dict__.get("_overrides")
        if overrides is None:
            raise AttributeError(name)
        entry = overrides.get(name)
        if entry is not None:
            return entry.bind(self)
        return resolve_fallback(self.name, self.context, name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def build_matcher(
    name: str,
    declare: Callable[..., Any],
    context: object = None,
    expected: Sequence[Any] = (),
    printer: PrettyPrinter | None = None,
) -> Matcher:
    """Allocate a Matcher and run `declare(dsl, *expected)` against it.

    Raises DeclarationError (cause chained) if the declaration raises.
    """
    matcher = Matcher(name, expected, context=context, printer=printer)
    dsl = MatcherDSL(matcher)
    try:
        declare(dsl, *matcher.expected_as_array)
    except Exception as exc:
        raise DeclarationError(name, exc) from exc
    return matcher
