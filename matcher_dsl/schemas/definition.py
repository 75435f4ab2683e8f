"""Definition Schema — Pydantic model validating a matcher registration.

Invariants:
    - name is a Python identifier, not a keyword, not _-prefixed (it becomes
      an attribute of the Matchers namespace)
    - declare is callable
    - MatcherDefinition is frozen: a registered definition never changes

Design Decisions:
    - Pydantic at the registration boundary: the one place user input enters
      the engine, so validation lives here and core/ stays model-free
    - arbitrary_types_allowed for Callable: pydantic checks callability natively
"""

import keyword
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatcherDefinition(BaseModel):
    """A registered matcher: its name and its declaration procedure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    declare: Callable[..., Any]

    @field_validator("name")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        if not v.isidentifier() or keyword.iskeyword(v):
            raise ValueError(f"'{v}' is not a valid Python identifier")
        if v.startswith("_"):
            raise ValueError("matcher names cannot start with an underscore")
        return v
