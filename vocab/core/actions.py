"""
Learning events recorded in the codex.

There are two kinds of event: introducing a word (with a self-reported
confidence and a definition) and practicing a word (with a self-graded
correctness). Events are immutable once created.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import DecodeError, InvalidFieldError

FIELD_SEPARATOR = "$"
COMMAND_PREFIX = "!"

# Everything str.splitlines() treats as a line boundary
LINE_BREAKS = frozenset("\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029")


class Confidence(str, Enum):
    """How well the learner claims to know a word when introducing it."""

    KNOWN = "known"
    PARTIALLY_KNOWN = "partially_known"
    UNKNOWN = "unknown"

    @property
    def weight(self) -> float:
        return _CONFIDENCE_WEIGHTS[self]

    @classmethod
    def parse(cls, token: str) -> "Confidence":
        try:
            return cls(token)
        except ValueError:
            raise DecodeError(f"unknown confidence tag {token!r}") from None


class Correctness(str, Enum):
    """How well the learner recalled a word during practice."""

    CORRECT = "correct"
    PARTIALLY_CORRECT = "partially_correct"
    INCORRECT = "incorrect"

    @property
    def weight(self) -> float:
        return _CORRECTNESS_WEIGHTS[self]

    @classmethod
    def parse(cls, token: str) -> "Correctness":
        try:
            return cls(token)
        except ValueError:
            raise DecodeError(f"unknown correctness tag {token!r}") from None


_CONFIDENCE_WEIGHTS = {
    Confidence.KNOWN: 0.9,
    Confidence.PARTIALLY_KNOWN: 0.5,
    Confidence.UNKNOWN: 0.1,
}

_CORRECTNESS_WEIGHTS = {
    Correctness.CORRECT: 1.0,
    Correctness.PARTIALLY_CORRECT: 0.5,
    Correctness.INCORRECT: 0.0,
}


@dataclass(frozen=True)
class IntroduceAction:
    """A word entering the codex, or being re-introduced (which resets it)."""

    word: str
    confidence: Confidence
    definition: str


@dataclass(frozen=True)
class PracticeAction:
    """One practice attempt at a word already in the codex."""

    word: str
    correctness: Correctness


Action = Union[IntroduceAction, PracticeAction]


# =============================================================================
# Boundary validation
# =============================================================================


def validate_word(text: str) -> str:
    """
    Validate raw user input as a codex word.

    Returns the stripped word. Raises InvalidFieldError if the word is empty,
    contains whitespace or the field separator, or starts with the command
    prefix.
    """
    word = text.strip()
    if not word:
        raise InvalidFieldError("Word not found")
    if FIELD_SEPARATOR in word:
        raise InvalidFieldError(f"Word cannot contain {FIELD_SEPARATOR}")
    if any(ch.isspace() for ch in word):
        raise InvalidFieldError("Word cannot contain spaces")
    if word.startswith(COMMAND_PREFIX):
        raise InvalidFieldError(f"\"{COMMAND_PREFIX}\" command not recognized.")
    return word


def validate_definition(text: str) -> str:
    """Validate raw user input as a definition and return it stripped."""
    definition = text.strip()
    if not definition:
        raise InvalidFieldError("Definition not found")
    if FIELD_SEPARATOR in definition:
        raise InvalidFieldError(f"Definition cannot contain {FIELD_SEPARATOR}")
    if any(ch in LINE_BREAKS for ch in definition):
        raise InvalidFieldError("Definition must fit on one line")
    return definition
