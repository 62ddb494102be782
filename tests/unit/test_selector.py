"""
Unit tests for practice set selection.

Tests:
- Result size is min(count, number of words)
- Least-known words come first
- Fuzz is resampled on every call
- Seeded randomness makes selection reproducible
"""

import random

import pytest

from vocab.core import Codex, Confidence, IntroduceAction, PracticeSelector, WordEntry


def make_entries(*scores):
    return [WordEntry(f"w{i}", score, f"definition {i}") for i, score in enumerate(scores)]


@pytest.fixture
def three_word_codex(rng):
    codex = Codex(rng)
    codex.process_action(IntroduceAction("dog", Confidence.KNOWN, "a canine"))
    codex.process_action(IntroduceAction("cat", Confidence.UNKNOWN, "a feline"))
    codex.process_action(IntroduceAction("owl", Confidence.PARTIALLY_KNOWN, "a bird"))
    return codex


class TestPracticeSetSize:
    """Test the size of generated practice sets."""

    def test_count_larger_than_codex(self, three_word_codex):
        assert len(three_word_codex.generate_practice_set(5)) == 3

    def test_count_smaller_than_codex(self, three_word_codex):
        assert len(three_word_codex.generate_practice_set(2)) == 2

    def test_empty_codex(self, rng):
        assert Codex(rng).generate_practice_set(5) == []

    def test_zero_count(self, three_word_codex):
        assert three_word_codex.generate_practice_set(0) == []

    def test_negative_count_rejected(self, three_word_codex):
        with pytest.raises(ValueError):
            three_word_codex.generate_practice_set(-1)


class TestOrdering:
    """Test least-known-first ordering."""

    def test_well_separated_scores_are_ordered(self, three_word_codex):
        # 0.1 / 0.5 / 0.9 are further apart than the fuzz can bridge
        assert three_word_codex.generate_practice_set(3) == [
            ("cat", "a feline"),
            ("owl", "a bird"),
            ("dog", "a canine"),
        ]

    def test_lower_score_tends_to_come_first(self, rng):
        selector = PracticeSelector(rng)
        entries = [WordEntry("weak", 0.48, "w"), WordEntry("strong", 0.52, "s")]

        weak_first = sum(
            selector.select(entries, 2)[0][0] == "weak" for _ in range(1000)
        )

        # Expected rate is 0.82 for a fuzz of 0.05
        assert 700 < weak_first < 950

    def test_fuzz_resampled_per_call(self, rng):
        selector = PracticeSelector(rng)
        entries = make_entries(0.5, 0.5, 0.5, 0.5, 0.5)

        orderings = {tuple(selector.select(entries, 5)) for _ in range(20)}

        assert len(orderings) > 1

    def test_fuzz_bounds(self, rng):
        selector = PracticeSelector(rng, fuzz=0.05)
        for _ in range(500):
            assert 0.45 <= selector.fuzzed_score(0.5) <= 0.55

    def test_zero_fuzz_is_deterministic(self):
        selector = PracticeSelector(random.Random(), fuzz=0.0)
        entries = make_entries(0.3, 0.1, 0.2)
        assert [w for w, _ in selector.select(entries, 3)] == ["w1", "w2", "w0"]


class TestReproducibility:
    """A seeded randomness source gives the same selection."""

    def test_same_seed_same_selection(self):
        entries = make_entries(0.5, 0.51, 0.49, 0.5, 0.52, 0.48)
        first = PracticeSelector(random.Random(7)).select(entries, 4)
        second = PracticeSelector(random.Random(7)).select(entries, 4)
        assert first == second
