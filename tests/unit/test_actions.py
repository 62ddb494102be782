"""
Unit tests for codex actions and the input boundary validators.

Tests:
- Confidence / correctness weights and tag parsing
- Action immutability and value equality
- Word / definition validation rules
"""

import dataclasses

import pytest

from vocab.core import (
    Confidence,
    Correctness,
    DecodeError,
    IntroduceAction,
    InvalidFieldError,
    PracticeAction,
    validate_definition,
    validate_word,
)


class TestLevels:
    """Test the confidence and correctness enumerations."""

    @pytest.mark.parametrize(
        "level, weight",
        [
            (Confidence.KNOWN, 0.9),
            (Confidence.PARTIALLY_KNOWN, 0.5),
            (Confidence.UNKNOWN, 0.1),
        ],
    )
    def test_confidence_weights(self, level, weight):
        assert level.weight == weight

    @pytest.mark.parametrize(
        "level, weight",
        [
            (Correctness.CORRECT, 1.0),
            (Correctness.PARTIALLY_CORRECT, 0.5),
            (Correctness.INCORRECT, 0.0),
        ],
    )
    def test_correctness_weights(self, level, weight):
        assert level.weight == weight

    def test_tags_are_snake_case(self):
        assert [c.value for c in Confidence] == ["known", "partially_known", "unknown"]
        assert [c.value for c in Correctness] == ["correct", "partially_correct", "incorrect"]

    def test_parse_known_tag(self):
        assert Confidence.parse("partially_known") is Confidence.PARTIALLY_KNOWN
        assert Correctness.parse("incorrect") is Correctness.INCORRECT

    def test_parse_rejects_unknown_tag(self):
        with pytest.raises(DecodeError):
            Confidence.parse("maybe")
        with pytest.raises(DecodeError):
            Correctness.parse("Correct")


class TestActions:
    """Actions are immutable values."""

    def test_equal_by_value(self):
        a = IntroduceAction("dog", Confidence.KNOWN, "a canine")
        b = IntroduceAction("dog", Confidence.KNOWN, "a canine")
        assert a == b
        assert PracticeAction("dog", Correctness.CORRECT) != PracticeAction("dog", Correctness.INCORRECT)

    def test_frozen(self):
        action = PracticeAction("dog", Correctness.CORRECT)
        with pytest.raises(dataclasses.FrozenInstanceError):
            action.word = "cat"


class TestValidateWord:
    """Test validate_word boundary checks."""

    def test_strips_surrounding_whitespace(self):
        assert validate_word("  chien \n") == "chien"

    @pytest.mark.parametrize("raw", ["", "   ", "two words", "tab\there", "a$b", "!quit"])
    def test_rejects_invalid_words(self, raw):
        with pytest.raises(InvalidFieldError):
            validate_word(raw)

    def test_invalid_field_is_value_error(self):
        with pytest.raises(ValueError):
            validate_word("")

    def test_accepts_punctuation_and_unicode(self):
        assert validate_word("naïve-ish") == "naïve-ish"


class TestValidateDefinition:
    """Test validate_definition boundary checks."""

    def test_allows_spaces(self):
        assert validate_definition(" a small feline ") == "a small feline"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "  ",
            "costs $5",
            "line one\nline two",
            "first\u2028second",
            "page\x0cbreak",
            "next\x85line",
            "record\x1eseparator",
        ],
    )
    def test_rejects_invalid_definitions(self, raw):
        with pytest.raises(InvalidFieldError):
            validate_definition(raw)
