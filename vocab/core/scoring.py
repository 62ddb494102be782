"""
Knowledge score arithmetic.

A word's score starts at the weight of the confidence it was introduced with
and moves toward each practice outcome by an exponential moving average.
"""

from __future__ import annotations

from .actions import Confidence

RECENT_WEIGHT = 0.25
HISTORY_WEIGHT = 0.75


def initial_score(confidence: Confidence) -> float:
    """Score assigned when a word is (re-)introduced."""
    return confidence.weight


def update_score(prior: float, observation_weight: float) -> float:
    """Blend a new practice observation into the prior score."""
    return RECENT_WEIGHT * observation_weight + HISTORY_WEIGHT * prior
