"""
The Codex: event log plus derived per-word knowledge.

The log of actions is the only thing ever written to disk. Word entries are
rebuilt from scratch on load by replaying every action in order, and kept
current afterwards by applying each new action as it is appended.

File location is chosen by the caller (see config.Settings.codex_path).
"""

from __future__ import annotations

import contextlib
import os
import random
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from . import codec
from .actions import Action, IntroduceAction, PracticeAction
from .errors import DecodeError, PersistenceFailure, PracticeOnUnknownWord
from .scoring import initial_score, update_score
from .selector import FUZZ, PracticeSelector

DEFAULT_BACKUP_PATH = Path("backup.codex")

# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class WordEntry:
    """Current knowledge of a single word."""

    word: str
    knowledge_score: float  # Tends toward [0, 1]; recent practice weighs most
    definition: str
    practice_count: int = 0  # Practices since the last introduce


@dataclass
class SaveResult:
    """Where a save actually landed."""

    path: Path
    used_fallback: bool = False


# =============================================================================
# Codex
# =============================================================================


class Codex:
    """
    Append-only action history with a knowledge store derived from it.

    All mutation goes through process_action(). The store is never persisted;
    load() rebuilds it by replaying the decoded history.
    """

    def __init__(self, rng: random.Random | None = None, fuzz: float = FUZZ):
        self._history: list[Action] = []
        self._words: dict[str, WordEntry] = {}
        self._selector = PracticeSelector(rng, fuzz=fuzz)

    # =========================================================================
    # Event log
    # =========================================================================

    @property
    def history(self) -> tuple[Action, ...]:
        """Every action processed so far, in order."""
        return tuple(self._history)

    def process_action(self, action: Action) -> None:
        """
        Append an action to the log and apply it to the knowledge store.

        Raises:
            PracticeOnUnknownWord: if a practice action names a word that has
                not been introduced; the log is left unchanged
        """
        if isinstance(action, PracticeAction) and action.word not in self._words:
            raise PracticeOnUnknownWord(action.word)

        self._history.append(action)
        self._apply(action)

    def _apply(self, action: Action) -> None:
        if isinstance(action, IntroduceAction):
            self._words[action.word] = WordEntry(
                word=action.word,
                knowledge_score=initial_score(action.confidence),
                definition=action.definition,
            )
            logger.debug(f"Introduced {action.word!r} as {action.confidence.value}")
        else:
            entry = self._words[action.word]
            entry.knowledge_score = update_score(
                entry.knowledge_score, action.correctness.weight
            )
            entry.practice_count += 1
            logger.debug(
                f"Practiced {action.word!r} ({action.correctness.value}) "
                f"-> {entry.knowledge_score:.3f}"
            )

    # =========================================================================
    # Knowledge store queries
    # =========================================================================

    def contains(self, word: str) -> bool:
        return word in self._words

    def word_count(self) -> int:
        return len(self._words)

    def get(self, word: str) -> WordEntry | None:
        return self._words.get(word)

    def entries(self) -> list[WordEntry]:
        """Snapshot of all word entries, least-known first."""
        return sorted(self._words.values(), key=lambda e: (e.knowledge_score, e.word))

    def generate_practice_set(self, count: int) -> list[tuple[str, str]]:
        """
        Choose up to `count` (word, definition) pairs to drill.

        Lower-scored words come first; a small random fuzz is applied per word
        on every call so equal scores don't always appear in the same order.
        """
        return self._selector.select(self._words.values(), count)

    # =========================================================================
    # Serialization
    # =========================================================================

    @classmethod
    def load(cls, text: str, rng: random.Random | None = None, fuzz: float = FUZZ) -> "Codex":
        """
        Build a codex by decoding and replaying a whole log.

        Either every line decodes and replays, or an exception is raised and
        no codex is returned.

        Raises:
            DecodeError: if any non-blank line does not match the grammar
            PracticeOnUnknownWord: if the log practices a word before
                introducing it
        """
        actions = codec.decode_log(text)

        codex = cls(rng, fuzz=fuzz)
        for action in actions:
            codex.process_action(action)

        logger.info(f"Replayed {len(actions)} actions into {codex.word_count()} words")
        return codex

    def save(self) -> str:
        """Encode the full history, one action per line."""
        return codec.encode_log(self._history)

    @classmethod
    def from_file(cls, path: Path, rng: random.Random | None = None, fuzz: float = FUZZ) -> "Codex":
        """
        Load a codex from a UTF-8 log file.

        Raises:
            FileNotFoundError: if the file does not exist
            OSError: if the file cannot be read
            DecodeError: if the file is not UTF-8, or as for load()
            PracticeOnUnknownWord: as for load()
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"file is not valid UTF-8 ({e.reason} at byte {e.start})") from e
        logger.info(f"Loading codex from {path}")
        return cls.load(text, rng, fuzz=fuzz)

    def to_file(self, path: Path, backup_path: Path | None = None) -> SaveResult:
        """
        Write the log to `path`, falling back to `backup_path` if that fails.

        Raises:
            PersistenceFailure: if neither location could be written
        """
        path = Path(path)
        backup_path = Path(backup_path or DEFAULT_BACKUP_PATH)
        text = self.save()

        try:
            _write_atomic(path, text)
        except OSError as e:
            logger.warning(f"Could not write {path} ({e}); saving to {backup_path} instead")
        else:
            logger.info(f"Saved {len(self._history)} actions to {path}")
            return SaveResult(path=path)

        try:
            _write_atomic(backup_path, text)
        except OSError as e:
            logger.error(f"Fallback save to {backup_path} failed: {e}")
            raise PersistenceFailure(path, backup_path, e) from e

        logger.info(f"Saved {len(self._history)} actions to fallback {backup_path}")
        return SaveResult(path=backup_path, used_fallback=True)


def _write_atomic(path: Path, text: str) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise
