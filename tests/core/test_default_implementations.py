"""Default Implementation Set — behavior when nothing is overridden.

Tests cover:
    - description/failure messages built from name + expected
    - does_not_match negates the (overridden) match
    - is_diffable defaults to False
    - matches has no baseline: delegated to context or MethodNotUnderstood
    - defaults ignore an overridden description
"""

import pytest

from matcher_dsl.core.default_implementations import default_sentence
from matcher_dsl.core.errors import MethodNotUnderstood
from matcher_dsl.core.format_sentence import SentencePrinter
from matcher_dsl.core.matcher import Matcher, build_matcher


def _declare_be_even(dsl):
    dsl.match(lambda actual: actual % 2 == 0)


def test_default_description_for_be_even():
    matcher = build_matcher("be_even", _declare_be_even)
    assert matcher.description() == "be even"


def test_default_failure_message_for_be_even():
    matcher = build_matcher("be_even", _declare_be_even)
    matcher.matches(3)
    assert matcher.failure_message() == "expected 3 to be even"


def test_default_failure_message_when_negated():
    matcher = build_matcher("be_even", _declare_be_even)
    matcher.does_not_match(4)
    assert matcher.failure_message_when_negated() == "expected 4 not to be even"


def test_default_description_includes_expected_values():
    matcher = build_matcher("be_between", lambda dsl, lo, hi: None, expected=(1, 10))
    assert matcher.description() == "be between 1 and 10"


def test_default_failure_message_inspects_strings():
    matcher = build_matcher(
        "start_with", lambda dsl, prefix: dsl.match(lambda a: a.startswith(prefix)),
        expected=("ab",),
    )
    matcher.matches("xyz")
    assert matcher.failure_message() == "expected 'xyz' to start with 'ab'"


def test_default_does_not_match_negates_match():
    matcher = build_matcher("be_even", _declare_be_even)
    assert matcher.does_not_match(3) is True
    assert matcher.does_not_match(4) is False


def test_default_is_diffable_false_for_any_name():
    for name in ("be_even", "eq", "diffable"):
        assert Matcher(name).is_diffable() is False


def test_default_matches_without_override_is_not_understood():
    matcher = Matcher("be_even")
    with pytest.raises(MethodNotUnderstood) as exc_info:
        matcher.matches(4)
    assert exc_info.value.matcher_name == "be_even"
    assert exc_info.value.method_name == "matches"


def test_default_matches_delegates_to_context_that_supports_it():
    class Context:
        def matches(self, actual):
            return actual == "ctx"

    assert Matcher("anything", context=Context()).matches("ctx") is True


def test_delegated_match_result_is_coerced_to_bool():
    """A context answering with a truthy non-bool still yields True/False."""
    class Context:
        def matches(self, actual):
            return "yes" if actual else ""

    matcher = Matcher("anything", context=Context())
    assert matcher.matches(1) is True
    assert matcher.matches(0) is False
    assert matcher.does_not_match(0) is True


def test_defaults_ignore_overridden_description():
    def declare(dsl):
        dsl.match(lambda actual: False)
        dsl.description(lambda: "be something custom")

    matcher = build_matcher("be_even", declare)
    matcher.matches(1)
    assert matcher.description() == "be something custom"
    assert matcher.failure_message() == "expected 1 to be even"


def test_override_can_reach_default_layer():
    def declare(dsl):
        dsl.match(lambda actual: False)
        dsl.failure_message(
            lambda: dsl.defaults.failure_message() + " (and it should be)",
        )

    matcher = build_matcher("be_even", declare)
    matcher.matches(5)
    assert matcher.failure_message() == "expected 5 to be even (and it should be)"


def test_default_sentence_helper():
    assert default_sentence(SentencePrinter(), "include", (1, 2, 3)) == "include 1, 2, and 3"
