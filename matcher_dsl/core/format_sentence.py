"""Sentence Formatting — pure functions turning matcher names and values into English.

Invariants:
    - All functions are pure (no IO, no settings lookup)
    - name_to_sentence("be_even") == "be even"
    - to_sentence() output is empty or starts with a single space, so callers concatenate
    - Nested matchers render their description(), never their repr

Design Decisions:
    - repr() as the inspect primitive: the Python spelling of a value a reader can paste back
    - Truncation is opt-in (max_length=0 disables it); long reprs are usually the point
"""

from typing import Any, Sequence


def split_words(name: str) -> str:
    """Underscores become spaces: `have_errors_on` → `have errors on`."""
    return str(name).replace("_", " ")


def is_matcher_with_description(item: Any) -> bool:
    """Duck-typed check so matchers from any library render by description."""
    return callable(getattr(item, "matches", None)) and callable(
        getattr(item, "description", None),
    )


def truncate(text: str, max_length: int) -> str:
    if max_length <= 0 or len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


def join_words(words: Sequence[str]) -> str:
    """Oxford-comma join with a leading space (empty input → empty string)."""
    if len(words) == 0:
        return ""
    if len(words) == 1:
        return f" {words[0]}"
    if len(words) == 2:
        return f" {words[0]} and {words[1]}"
    return f" {', '.join(words[:-1])}, and {words[-1]}"


class SentencePrinter:
    """Default PrettyPrinter used by the Default Implementation Set."""

    def __init__(self, max_length: int = 0):
        self.max_length = max_length

    def name_to_sentence(self, name: str) -> str:
        return split_words(name)

    def inspect(self, value: Any) -> str:
        return truncate(repr(value), self.max_length)

    def to_word(self, item: Any) -> str:
        if is_matcher_with_description(item):
            return item.description()
        return self.inspect(item)

    def to_sentence(self, expected: Sequence[Any]) -> str:
        if expected is None:
            return ""
        return join_words([self.to_word(item) for item in expected])
