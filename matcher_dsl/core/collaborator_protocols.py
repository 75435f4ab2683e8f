"""Collaborator Protocols — contracts between the matcher core and its environment.

Invariants:
    - Core NEVER reaches into the caller's environment except through ExecutionContext
    - responds_to() is queried before every invoke(); invoke() never guesses
    - Private (_-prefixed) names are never reported as supported by ObjectContext
    - Human-readable formatting is fully delegated to a PrettyPrinter

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with the two methods qualifies
    - ObjectContext adapter: plain objects (test cases, namespaces) become contexts
      without implementing the protocol themselves
    - NullContext over Optional checks: delegation code has a single path
"""

from typing import Any, Callable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ExecutionContext(Protocol):
    """Environment to which a matcher forwards calls it cannot service."""
    def responds_to(self, name: str) -> bool: ...
    def invoke(
        self, name: str, args: Sequence[Any], kwargs: dict[str, Any],
    ) -> Any: ...


class PrettyPrinter(Protocol):
    """Turns matcher names and values into English fragments."""
    def name_to_sentence(self, name: str) -> str: ...
    def to_sentence(self, expected: Sequence[Any]) -> str: ...
    def inspect(self, value: Any) -> str: ...


class ObjectContext:
    """Adapts any object: its public callable attributes are the supported names."""

    def __init__(self, target: object):
        self.target = target

    def responds_to(self, name: str) -> bool:
        if name.startswith("_"):
            return False
        return callable(getattr(self.target, name, None))

    def invoke(
        self, name: str, args: Sequence[Any], kwargs: dict[str, Any],
    ) -> Any:
        method: Callable[..., Any] = getattr(self.target, name)
        return method(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ObjectContext({self.target!r})"


class NullContext:
    """Context that supports nothing; every delegated call is not understood."""

    def responds_to(self, name: str) -> bool:
        return False

    def invoke(
        self, name: str, args: Sequence[Any], kwargs: dict[str, Any],
    ) -> Any:
        raise LookupError(f"NullContext cannot invoke '{name}'")

    def __repr__(self) -> str:
        return "NullContext()"


def as_execution_context(context: object) -> ExecutionContext:
    """Normalize None / protocol implementations / plain objects to a context."""
    if context is None:
        return NullContext()
    if isinstance(context, ExecutionContext):
        return context
    return ObjectContext(context)
