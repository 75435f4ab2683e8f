"""Domain Types — rich types that replace bare strings across the matcher engine.

Invariants:
    - Every protocol method name lives in ProtocolMethod, no raw string matching
    - MatcherState encodes the per-instance lifecycle (declared → evaluated | errored)
    - ProtocolMethod values are the Python attribute names on Matcher

Design Decisions:
    - str Enums: override tables key on plain strings, so chain names and
      protocol names share one dict without conversion
    - NewType over wrapper classes: zero runtime cost (ADR: matcher names are hot-path keys)
"""

from enum import Enum
from typing import NewType


MatcherName = NewType("MatcherName", str)


class ProtocolMethod(str, Enum):
    """The fixed protocol surface an expectation engine relies on."""
    MATCHES = "matches"
    DOES_NOT_MATCH = "does_not_match"
    DESCRIPTION = "description"
    FAILURE_MESSAGE = "failure_message"
    FAILURE_MESSAGE_WHEN_NEGATED = "failure_message_when_negated"
    DIFFABLE = "is_diffable"


class MatcherState(str, Enum):
    """Per-instance lifecycle. Failed declarations never produce an instance."""
    DECLARED = "declared"
    EVALUATED = "evaluated"
    ERRORED = "errored"
