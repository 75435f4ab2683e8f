"""Matcher Registry — process-wide name → definition mapping and constructor namespace.

Invariants:
    - One MatcherDefinition per name; re-registering replaces it (last writer wins)
    - Every definition is exposed as a constructor method on the registry's namespace
      class; calling it on a namespace instance builds a Matcher whose execution
      context is that instance
    - Definitions are validated (MatcherDefinition) before anything is installed
    - No locking: registration is expected during single-threaded setup
    - Namespace instances are always adapted with ObjectContext: a constructor
      named `invoke` or `responds_to` never turns the namespace into a context

Design Decisions:
    - Constructors installed as methods on a namespace class: test classes mix in
      Matchers and call `self.be_even()`, so the test case becomes the context
    - Fresh registries get a fresh namespace subclass: isolated registries never
      see each other's constructors (ADR: test isolation without global resets)
    - get_registry() is cached like get_settings(): settings read once per process
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Iterator

from pydantic import ValidationError

from matcher_dsl.config import get_settings
from matcher_dsl.core.collaborator_protocols import ObjectContext, PrettyPrinter
from matcher_dsl.core.domain_types import MatcherName
from matcher_dsl.core.errors import InvalidDefinitionError
from matcher_dsl.core.format_sentence import SentencePrinter
from matcher_dsl.core.matcher import Matcher, build_matcher
from matcher_dsl.schemas.definition import MatcherDefinition

logger = logging.getLogger(__name__)

Declaration = Callable[..., Any]


class MatcherNamespace:
    """Base for constructor namespaces. Instances act as execution contexts."""


class Matchers(MatcherNamespace):
    """The shared namespace of the default registry. Mix into test classes."""


class MatcherRegistry:
    """Registers declarations and builds matchers from them."""

    def __init__(
        self,
        namespace: type[MatcherNamespace] | None = None,
        printer: PrettyPrinter | None = None,
        warn_on_redefine: bool = True,
    ):
        self.namespace = namespace or type("Matchers", (MatcherNamespace,), {})
        self.matchers = self.namespace()
        self.printer = printer or SentencePrinter()
        self.warn_on_redefine = warn_on_redefine
        self._definitions: dict[MatcherName, MatcherDefinition] = {}

    # ─── Registration ────────────────────────────────────────────

    def define(
        self, name: str | Declaration | None = None,
        declare: Declaration | None = None,
    ) -> Any:
        """Register a matcher.

        Forms:
            registry.define("be_even", fn)   → constructor
            @registry.define("be_even")      → constructor
            @registry.define                 → constructor named after fn
        """
        if callable(name) and declare is None:
            return self._register(getattr(name, "__name__", ""), name)
        if declare is None:
            def decorator(fn: Declaration) -> Callable[..., Matcher]:
                return self._register(name or getattr(fn, "__name__", ""), fn)
            return decorator
        return self._register(name, declare)

    matcher = define

    def _register(self, name: Any, declare: Any) -> Callable[..., Matcher]:
        definition = self._validate(name, declare)
        key = MatcherName(definition.name)
        if key in self._definitions and self.warn_on_redefine:
            logger.warning(
                f"Matcher '{key}' redefined; previous declaration replaced",
                extra={"matcher_name": key},
            )
        self._definitions[key] = definition
        setattr(self.namespace, key, self._make_method(definition))
        logger.debug(f"Registered matcher '{key}'", extra={"matcher_name": key})
        return self._make_constructor(definition)

    def _validate(self, name: Any, declare: Any) -> MatcherDefinition:
        try:
            return MatcherDefinition(name=name, declare=declare)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(loc) for loc in first["loc"]) or "definition"
            error = InvalidDefinitionError(
                f"Invalid matcher definition ({field}): {first['msg']}",
                field, name if isinstance(name, str) else None,
            )
            logger.warning(
                error.message,
                extra={
                    "matcher_name": error.context.matcher_name,
                    "error_code": error.code,
                    "error": error.to_dict()["error"],
                },
            )
            raise error from e

    def _make_method(self, definition: MatcherDefinition) -> Callable[..., Matcher]:
        """Constructor installed on the namespace class; `self` is the context."""
        printer = self.printer

        def construct(context: MatcherNamespace, *expected: Any) -> Matcher:
            return build_matcher(
                definition.name, definition.declare, ObjectContext(context),
                expected, printer,
            )

        construct.__name__ = definition.name
        construct.__qualname__ = f"{self.namespace.__name__}.{definition.name}"
        construct.__doc__ = definition.declare.__doc__
        return construct

    def _make_constructor(
        self, definition: MatcherDefinition,
    ) -> Callable[..., Matcher]:
        """Free-standing constructor bound to the shared namespace instance."""

        def construct(*expected: Any) -> Matcher:
            return build_matcher(
                definition.name, definition.declare,
                ObjectContext(self.matchers), expected, self.printer,
            )

        construct.__name__ = definition.name
        construct.__doc__ = definition.declare.__doc__
        return construct

    def forget(self, name: str) -> None:
        """Remove a definition and its namespace constructor."""
        self._definitions.pop(MatcherName(name), None)
        if name in vars(self.namespace):
            delattr(self.namespace, name)

    def clear(self) -> None:
        """Forget every definition, removing each constructor from the namespace."""
        for name in list(self._definitions):
            self.forget(name)

    # ─── Lookup ──────────────────────────────────────────────────

    def get(self, name: str) -> MatcherDefinition | None:
        return self._definitions.get(MatcherName(name))

    def build(self, name: str, *expected: Any, context: object = None) -> Matcher:
        """Build by name; the context defaults to the shared namespace instance."""
        definition = self._definitions.get(MatcherName(name))
        if definition is None:
            raise KeyError(f"No matcher named '{name}' is registered")
        return build_matcher(
            definition.name, definition.declare,
            ObjectContext(self.matchers) if context is None else context,
            expected, self.printer,
        )

    def names(self) -> list[str]:
        return sorted(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[MatcherDefinition]:
        return iter(list(self._definitions.values()))


@lru_cache
def get_registry() -> MatcherRegistry:
    """The process-wide registry, configured once from Settings."""
    settings = get_settings()
    return MatcherRegistry(
        namespace=Matchers,
        printer=SentencePrinter(settings.repr_max_length),
        warn_on_redefine=settings.warn_on_redefine,
    )


def define(
    name: str | Declaration | None = None, declare: Declaration | None = None,
) -> Any:
    """Register on the process-wide registry. See MatcherRegistry.define."""
    return get_registry().define(name, declare)


matcher = define
