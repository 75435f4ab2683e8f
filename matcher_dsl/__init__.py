"""matcher-dsl — declare named, configurable matchers with a small DSL.

Invariants:
    - Importing the package registers nothing, reads no settings, configures no logging
    - Public names re-exported explicitly (no star imports)

Design Decisions:
    - Re-exports at the package root: `from matcher_dsl import define, expect`
      is the whole user-facing surface
"""

from matcher_dsl.config import get_settings
from matcher_dsl.core.errors import (
    DeclarationError,
    ExpectationNotMetError,
    InvalidChainNameError,
    InvalidDefinitionError,
    MatcherError,
    MethodNotUnderstood,
)
from matcher_dsl.core.matcher import Matcher, build_matcher
from matcher_dsl.infrastructure.observability import setup_logging
from matcher_dsl.services.expectation_handler import expect
from matcher_dsl.services.matcher_registry import (
    MatcherRegistry,
    Matchers,
    define,
    get_registry,
    matcher,
)

__all__ = [
    "DeclarationError",
    "ExpectationNotMetError",
    "InvalidChainNameError",
    "InvalidDefinitionError",
    "Matcher",
    "MatcherError",
    "MatcherRegistry",
    "Matchers",
    "MethodNotUnderstood",
    "build_matcher",
    "configure",
    "define",
    "expect",
    "get_registry",
    "matcher",
]


def configure() -> None:
    """Apply logging settings from the environment (MATCHER_DSL_*)."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
