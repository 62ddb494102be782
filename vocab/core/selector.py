"""
Practice set selection.

Words are ranked by knowledge score with a little uniform noise added, so
words with near-identical scores do not always come up in the same order.
The least-known words come first.
"""

from __future__ import annotations

import random
from typing import Iterable

from loguru import logger

FUZZ = 0.05


class PracticeSelector:
    """
    Rank words for a practice session.

    The randomness source is injected so a seeded generator gives a
    reproducible ranking.
    """

    def __init__(self, rng: random.Random | None = None, fuzz: float = FUZZ):
        self.rng = rng or random.Random()
        self.fuzz = fuzz

    def fuzzed_score(self, score: float) -> float:
        return score + self.rng.uniform(-self.fuzz, self.fuzz)

    def select(self, entries: Iterable, count: int) -> list[tuple[str, str]]:
        """
        Pick up to `count` (word, definition) pairs, least-known first.

        Args:
            entries: objects with `word`, `knowledge_score` and `definition`
            count: maximum number of pairs to return

        Returns:
            min(count, len(entries)) pairs in ascending fuzzed-score order
        """
        if count < 0:
            raise ValueError(f"practice set size must be non-negative, got {count}")
        if count == 0:
            return []

        # Noise is drawn fresh for every word on every call
        ranked = sorted(
            ((self.fuzzed_score(e.knowledge_score), e) for e in entries),
            key=lambda pair: pair[0],
        )
        chosen = [(e.word, e.definition) for _, e in ranked[:count]]

        logger.debug(f"Selected {len(chosen)} of {len(ranked)} words for practice")
        return chosen
