"""Error Hierarchy — typed, categorized exceptions for all matcher failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ExpectationNotMetError is also an AssertionError: test runners report it as a failure
    - MethodNotUnderstood is also an AttributeError: hasattr()/getattr(default) keep working
    - to_dict() produces the envelope attached to failure log records (extra "error")

Design Decisions:
    - Single hierarchy with MatcherError base: callers catch one type for all engine errors
    - ErrorContext as dataclass: rich observability without coupling core to logging
    - Builtin mixins (AssertionError, AttributeError, ValueError) over custom-only types:
      Python protocols (hasattr, pytest assertion reporting) already understand them
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DECLARATION = "declaration"
    EXPECTATION = "expectation"
    DELEGATION = "delegation"
    VALIDATION = "validation"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    matcher_name: str | None = None
    method_name: str | None = None
    debug_info: dict[str, Any] | None = None


class MatcherError(Exception):
    """Base exception for all matcher engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a structured error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "matcher_name": self.context.matcher_name,
                    "method_name": self.context.method_name,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Declaration Errors ─────────────────────────────────────────

class DeclarationError(MatcherError):
    """The declaration procedure raised while building an instance."""
    def __init__(self, matcher_name: str, cause: BaseException):
        super().__init__(
            f"Declaration of matcher '{matcher_name}' failed: "
            f"{type(cause).__name__}: {cause}",
            "DECLARATION_FAILED", ErrorCategory.DECLARATION,
            ErrorSeverity.CRITICAL,
            ErrorContext(matcher_name=matcher_name),
        )
        self.matcher_name = matcher_name


class InvalidDefinitionError(MatcherError, ValueError):
    """Registration rejected: bad matcher name or non-callable declaration."""
    def __init__(self, message: str, field: str, matcher_name: str | None = None):
        super().__init__(
            message, "INVALID_DEFINITION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(matcher_name=matcher_name, debug_info={"field": field}),
        )
        self.field = field


class InvalidChainNameError(MatcherError, ValueError):
    """chain() name is not an identifier or shadows the fixed Matcher surface."""
    def __init__(self, matcher_name: str, chain_name: str):
        super().__init__(
            f"Cannot chain '{chain_name}' on matcher '{matcher_name}': "
            f"name is reserved or not a valid identifier",
            "INVALID_CHAIN_NAME", ErrorCategory.DECLARATION,
            ErrorSeverity.ERROR,
            ErrorContext(matcher_name=matcher_name, method_name=chain_name),
        )
        self.chain_name = chain_name


# ─── Evaluation Errors ──────────────────────────────────────────

class ExpectationNotMetError(MatcherError, AssertionError):
    """A (possibly nested) expectation failed."""
    def __init__(self, message: str, matcher_name: str | None = None):
        super().__init__(
            message, "EXPECTATION_NOT_MET", ErrorCategory.EXPECTATION,
            ErrorSeverity.WARNING,
            ErrorContext(matcher_name=matcher_name),
        )


class MethodNotUnderstood(MatcherError, AttributeError):
    """Neither the matcher nor its execution context can service a call."""
    def __init__(self, matcher_name: str, method_name: str):
        super().__init__(
            f"Matcher '{matcher_name}' does not understand '{method_name}' "
            f"and its execution context does not respond to it",
            "METHOD_NOT_UNDERSTOOD", ErrorCategory.DELEGATION,
            ErrorSeverity.ERROR,
            ErrorContext(matcher_name=matcher_name, method_name=method_name),
        )
        self.matcher_name = matcher_name
        self.method_name = method_name
        # AttributeError.name: lets tracebacks suggest near-miss attribute names
        self.name = method_name
