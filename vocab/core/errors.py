"""
Exception types for the codex core.
"""

from __future__ import annotations

from pathlib import Path


class CodexError(Exception):
    """Base class for all codex errors."""
    pass


class DecodeError(CodexError):
    """Raised when a persisted line does not match the log grammar."""

    def __init__(self, message: str, line: str | None = None, line_number: int | None = None):
        self.message = message
        self.line = line
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        if self.line is None:
            return f"{where}{self.message}"
        return f"{where}{self.message} ({self.line!r})"

    def at_line(self, line_number: int) -> "DecodeError":
        """Return a copy of this error tagged with its position in a file."""
        return DecodeError(self.message, self.line, line_number)


class PracticeOnUnknownWord(CodexError):
    """Raised when a practice action references a word that was never introduced."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"cannot practice {word!r}: word has not been introduced")


class PersistenceFailure(CodexError):
    """Raised when neither the save target nor the fallback could be written."""

    def __init__(self, path: Path, backup_path: Path, cause: OSError):
        self.path = path
        self.backup_path = backup_path
        self.cause = cause
        super().__init__(
            f"could not write {path} or fallback {backup_path}: {cause}"
        )


class InvalidFieldError(CodexError, ValueError):
    """Raised by the boundary validators when user text cannot be stored."""
    pass
