"""
Codex core: actions, the log codec, scoring, and the Codex aggregate.
"""

from .actions import (
    Action,
    Confidence,
    Correctness,
    IntroduceAction,
    PracticeAction,
    validate_definition,
    validate_word,
)
from .codec import decode, decode_log, encode, encode_log
from .codex import Codex, SaveResult, WordEntry
from .errors import (
    CodexError,
    DecodeError,
    InvalidFieldError,
    PersistenceFailure,
    PracticeOnUnknownWord,
)
from .scoring import initial_score, update_score
from .selector import PracticeSelector

__all__ = [
    "Action",
    "Codex",
    "CodexError",
    "Confidence",
    "Correctness",
    "DecodeError",
    "IntroduceAction",
    "InvalidFieldError",
    "PersistenceFailure",
    "PracticeAction",
    "PracticeOnUnknownWord",
    "PracticeSelector",
    "SaveResult",
    "WordEntry",
    "decode",
    "decode_log",
    "encode",
    "encode_log",
    "initial_score",
    "update_score",
    "validate_definition",
    "validate_word",
]
