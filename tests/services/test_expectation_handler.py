"""Expectation Handler — driving matchers through to()/not_to().

Tests cover:
    - to() passes / raises ExpectationNotMetError with failure_message
    - not_to() uses does_not_match, including a distinct match_when_negated
    - Custom messages (str and callable)
    - Failures logged with error_code and the error envelope
    - Diffable matchers append expected/actual lines
    - Nested expectations inside a match block become a plain non-match
"""

import logging

import pytest

from matcher_dsl.core.errors import ExpectationNotMetError
from matcher_dsl.core.matcher import build_matcher
from matcher_dsl.services.expectation_handler import ExpectationTarget, expect


def declare_be_even(dsl):
    dsl.match(lambda actual: actual % 2 == 0)


def be_even():
    return build_matcher("be_even", declare_be_even)


def test_to_passes():
    assert expect(4).to(be_even()) is True


def test_to_fails_with_failure_message():
    with pytest.raises(ExpectationNotMetError) as exc_info:
        expect(3).to(be_even())
    assert str(exc_info.value) == "expected 3 to be even"
    assert exc_info.value.context.matcher_name == "be_even"


def test_failure_is_logged_with_error_envelope(caplog):
    with caplog.at_level(logging.DEBUG, logger="matcher_dsl.services.expectation_handler"):
        with pytest.raises(ExpectationNotMetError):
            expect(3).to(be_even())
    record = caplog.records[-1]
    assert record.matcher_name == "be_even"
    assert record.error_code == "EXPECTATION_NOT_MET"
    assert record.error["message"] == "expected 3 to be even"
    assert record.error["severity"] == "warning"


def test_not_to_passes_and_fails():
    assert expect(3).not_to(be_even()) is True
    with pytest.raises(ExpectationNotMetError, match="expected 4 not to be even"):
        expect(4).not_to(be_even())


def test_to_not_alias():
    assert ExpectationTarget.to_not is ExpectationTarget.not_to


def test_not_to_uses_match_when_negated():
    def declare(dsl):
        dsl.match(lambda actual: False)
        dsl.match_when_negated(lambda actual: False)

    with pytest.raises(ExpectationNotMetError):
        expect("job").not_to(build_matcher("be_done", declare))


def test_not_to_falls_back_to_negated_matches_for_plain_matchers():
    class Plain:
        def matches(self, actual):
            return False

        def failure_message_when_negated(self):
            return "never"

    assert expect(1).not_to(Plain()) is True


def test_custom_string_message():
    with pytest.raises(ExpectationNotMetError, match="^odd numbers are not welcome$"):
        expect(3).to(be_even(), "odd numbers are not welcome")


def test_custom_callable_message():
    with pytest.raises(ExpectationNotMetError, match="lazy message"):
        expect(3).to(be_even(), lambda: "lazy message")


def test_diffable_matcher_appends_expected_and_actual():
    def declare(dsl, expected):
        dsl.diffable()
        dsl.match(lambda actual: actual == expected)

    with pytest.raises(ExpectationNotMetError) as exc_info:
        expect("abd").to(build_matcher("eq_text", declare, expected=("abc",)))
    message = str(exc_info.value)
    assert message.startswith("expected 'abd' to eq text 'abc'")
    assert "Expected: 'abc'" in message
    assert "Got: 'abd'" in message


def test_nested_expectation_in_match_block_is_non_match():
    def declare(dsl):
        @dsl.match
        def _(actual):
            expect(actual).to(be_even())
            return actual > 0

    matcher = build_matcher("be_positive_even", declare)
    assert matcher.matches(4) is True
    assert matcher.matches(3) is False
    assert matcher.matches(-2) is False
