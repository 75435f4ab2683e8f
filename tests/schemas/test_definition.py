"""Definition Schema — MatcherDefinition validation.

Tests:
    - Valid identifiers accepted, declare must be callable
    - Keywords, leading underscores, empty names rejected
    - Model is frozen
"""

import pytest
from pydantic import ValidationError

from matcher_dsl.schemas.definition import MatcherDefinition


def _declare(dsl):
    return None


def test_valid_definition():
    definition = MatcherDefinition(name="have_errors_on", declare=_declare)
    assert definition.name == "have_errors_on"
    assert definition.declare is _declare


@pytest.mark.parametrize("name", ["", "two words", "9lives", "lambda", "_hidden"])
def test_invalid_names(name):
    with pytest.raises(ValidationError):
        MatcherDefinition(name=name, declare=_declare)


def test_declare_must_be_callable():
    with pytest.raises(ValidationError):
        MatcherDefinition(name="be_even", declare=42)


def test_definition_is_frozen():
    definition = MatcherDefinition(name="be_even", declare=_declare)
    with pytest.raises(ValidationError):
        definition.name = "be_odd"
