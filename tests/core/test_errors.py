"""Error Hierarchy — codes, categories, builtin compatibility and envelopes.

Tests cover:
    - Every error is a MatcherError with code/category/severity
    - Builtin mixins: AssertionError, AttributeError, ValueError
    - to_dict() envelope shape (attached to failure log records)
"""

import pytest

from matcher_dsl.core.errors import (
    DeclarationError,
    ErrorCategory,
    ErrorSeverity,
    ExpectationNotMetError,
    InvalidChainNameError,
    InvalidDefinitionError,
    MatcherError,
    MethodNotUnderstood,
)


def test_declaration_error_names_matcher_and_cause():
    err = DeclarationError("be_even", RuntimeError("boom"))
    assert isinstance(err, MatcherError)
    assert err.code == "DECLARATION_FAILED"
    assert err.category == ErrorCategory.DECLARATION
    assert err.severity == ErrorSeverity.CRITICAL
    assert "be_even" in str(err)
    assert "RuntimeError: boom" in str(err)


def test_expectation_not_met_is_assertion_error():
    err = ExpectationNotMetError("expected 3 to be even", "be_even")
    assert isinstance(err, AssertionError)
    assert err.context.matcher_name == "be_even"
    with pytest.raises(AssertionError):
        raise err


def test_method_not_understood_is_attribute_error():
    err = MethodNotUnderstood("be_even", "frobnicate")
    assert isinstance(err, AttributeError)
    assert err.matcher_name == "be_even"
    assert err.method_name == "frobnicate"
    assert "be_even" in err.message
    assert "frobnicate" in err.message


def test_validation_errors_are_value_errors():
    assert isinstance(InvalidDefinitionError("bad", "name"), ValueError)
    assert isinstance(InvalidChainNameError("m", "matches"), ValueError)


def test_invalid_definition_error_records_field():
    err = InvalidDefinitionError("bad name", "name", "1abc")
    assert err.field == "name"
    assert err.context.debug_info == {"field": "name"}


def test_to_dict_envelope():
    err = MethodNotUnderstood("be_even", "frobnicate")
    payload = err.to_dict()["error"]
    assert payload["code"] == "METHOD_NOT_UNDERSTOOD"
    assert payload["category"] == "delegation"
    assert payload["severity"] == "error"
    assert payload["context"]["matcher_name"] == "be_even"
    assert payload["context"]["method_name"] == "frobnicate"
    assert "timestamp" in payload
