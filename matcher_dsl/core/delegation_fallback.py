"""Delegation Fallback — forwards calls a matcher cannot service to its execution context.

Invariants:
    - Forwarding happens only when context.responds_to(name) is True
    - Arguments (positional, keyword, trailing callables) are forwarded unchanged
    - The context's result and errors are returned/raised verbatim
    - Dunder and private names are never delegated; they fail immediately
    - Unsupported names raise MethodNotUnderstood naming matcher AND method

Design Decisions:
    - Explicit capability query over reflective dispatch: the context decides
      what it exposes (ADR: no open-ended method_missing)
    - Forwarder returned as a callable: attribute access and call stay separate,
      so getattr(matcher, name) behaves like any bound method
"""

from typing import Any, Callable

from matcher_dsl.core.collaborator_protocols import ExecutionContext
from matcher_dsl.core.errors import MethodNotUnderstood


def is_delegable(method_name: str) -> bool:
    """Only public names ever leave the matcher."""
    return not method_name.startswith("_")


def context_supports(context: ExecutionContext, method_name: str) -> bool:
    return is_delegable(method_name) and bool(context.responds_to(method_name))


def make_forwarder(
    context: ExecutionContext, method_name: str,
) -> Callable[..., Any]:
    """Build a callable that invokes `method_name` on the context."""

    def forward(*args: Any, **kwargs: Any) -> Any:
        return context.invoke(method_name, args, kwargs)

    forward.__name__ = method_name
    forward.__qualname__ = f"delegated.{method_name}"
    return forward


def resolve_fallback(
    matcher_name: str, context: ExecutionContext, method_name: str,
) -> Callable[..., Any]:
    """Return a forwarder for `method_name`, or raise MethodNotUnderstood."""
    if context_supports(context, method_name):
        return make_forwarder(context, method_name)
    raise MethodNotUnderstood(matcher_name, method_name)
