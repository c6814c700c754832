"""Tests for the crash-safe pattern validator."""

import pytest

from patternsmith.validator import (
    OutcomeKind,
    TestMode,
    TestOutcome,
    evaluate,
    validate_pattern,
)

# =============================================================================
# Invalid patterns
# =============================================================================


class TestInvalidPatterns:
    """Malformed patterns must come back as outcomes, never exceptions."""

    def test_unclosed_bracket(self):
        outcome = evaluate("[", "abc")
        assert outcome.kind is OutcomeKind.INVALID_PATTERN
        assert outcome.is_invalid
        assert outcome.message

    @pytest.mark.parametrize("pattern", ["(", "*abc", "a{2,1}", "(?P<x>a)(?P<x>b)", "\\"])
    def test_various_syntax_errors(self, pattern):
        outcome = evaluate(pattern, "anything")
        assert outcome.kind is OutcomeKind.INVALID_PATTERN

    @pytest.mark.parametrize("mode", list(TestMode))
    def test_invalid_in_every_mode(self, mode):
        assert evaluate("[", "abc", mode).is_invalid

    def test_invalid_pattern_has_no_matches(self):
        outcome = evaluate(")", "abc")
        assert outcome.matches is None
        assert not outcome.has_matches

    def test_validate_pattern(self):
        assert validate_pattern("[a-z]+") is None
        assert validate_pattern("[") is not None


# =============================================================================
# Enumerate mode
# =============================================================================


class TestEnumerateMode:
    def test_all_matches_in_order(self):
        outcome = evaluate("[0-9]+", "abc123def456")
        assert outcome == TestOutcome.matched(["123", "456"])
        assert outcome.matches == ("123", "456")

    def test_default_mode_is_enumerate(self):
        assert evaluate("b", "abcb").matches == ("b", "b")

    def test_zero_hits_is_matched_empty(self):
        """Ran with zero hits is distinguishable from not run."""
        outcome = evaluate("[0-9]+", "no digits", TestMode.ENUMERATE)
        assert outcome.kind is OutcomeKind.MATCHED
        assert outcome.matches == ()
        assert outcome.is_evaluated
        assert not outcome.has_matches

    def test_case_insensitive(self):
        assert evaluate("hello", "Hello HELLO hello").matches == ("Hello", "HELLO", "hello")

    def test_groups_return_whole_matches(self):
        outcome = evaluate(r"(\d+)-(\d+)", "10-20 and 30-40")
        assert outcome.matches == ("10-20", "30-40")

    def test_non_overlapping(self):
        assert evaluate("aa", "aaaa").matches == ("aa", "aa")

    def test_empty_input(self):
        assert evaluate("x", "").matches == ()


# =============================================================================
# Existence mode
# =============================================================================


class TestExistenceMode:
    def test_anchored_exact_match(self):
        outcome = evaluate("^hello$", "hello", TestMode.EXISTENCE)
        assert outcome.kind is OutcomeKind.MATCHED
        assert outcome.matches is None
        assert outcome.has_matches

    def test_anchored_mismatch(self):
        outcome = evaluate("^hello$", "hello world", TestMode.EXISTENCE)
        assert outcome.kind is OutcomeKind.NOT_MATCHED
        assert not outcome.has_matches

    def test_match_anywhere(self):
        assert evaluate("world", "hello WORLD", TestMode.EXISTENCE).has_matches

    def test_mode_accepts_string_value(self):
        assert evaluate("a", "a", "existence").kind is OutcomeKind.MATCHED


class TestOutcomeConstructors:
    def test_unevaluated(self):
        outcome = TestOutcome.unevaluated()
        assert not outcome.is_evaluated
        assert not outcome.has_matches
        assert not outcome.is_invalid

    def test_outcomes_are_values(self):
        assert TestOutcome.not_matched() == TestOutcome.not_matched()
        assert TestOutcome.matched(("a",)) != TestOutcome.matched(())
