"""
Line codec for the codex log file.

Each action is one line of `$`-separated fields with a leading tag:

    introduce$<word>$<confidence>$<definition>
    practice$<word>$<correctness>

There is no escaping. Words and definitions are validated at input time so
they never contain the separator or a line break. Surrounding whitespace is
tolerated around the tag, word and level tokens of hand-edited lines; the
definition is kept as written.
"""

from __future__ import annotations

from typing import Iterable

from .actions import (
    FIELD_SEPARATOR,
    Action,
    Confidence,
    Correctness,
    IntroduceAction,
    PracticeAction,
)
from .errors import DecodeError

SEPARATOR = FIELD_SEPARATOR
INTRODUCE_TAG = "introduce"
PRACTICE_TAG = "practice"


def encode(action: Action) -> str:
    """Encode one action as a single line (without a trailing newline)."""
    if isinstance(action, IntroduceAction):
        fields = [INTRODUCE_TAG, action.word, action.confidence.value, action.definition]
    elif isinstance(action, PracticeAction):
        fields = [PRACTICE_TAG, action.word, action.correctness.value]
    else:
        raise TypeError(f"not a codex action: {action!r}")
    return SEPARATOR.join(fields)


def decode(line: str) -> Action:
    """
    Decode one line into an action.

    Raises:
        DecodeError: if the tag is unknown, the field count is wrong for the
            tag, or an enumeration token is not recognized
    """
    fields = line.rstrip("\r\n").split(SEPARATOR)
    tag = fields[0].strip()

    if tag == INTRODUCE_TAG:
        if len(fields) != 4:
            raise DecodeError(f"introduce needs 4 fields, got {len(fields)}", line)
        _, word, confidence, definition = fields
        try:
            return IntroduceAction(word.strip(), Confidence.parse(confidence.strip()), definition)
        except DecodeError as e:
            raise DecodeError(e.message, line) from None

    if tag == PRACTICE_TAG:
        if len(fields) != 3:
            raise DecodeError(f"practice needs 3 fields, got {len(fields)}", line)
        _, word, correctness = fields
        try:
            return PracticeAction(word.strip(), Correctness.parse(correctness.strip()))
        except DecodeError as e:
            raise DecodeError(e.message, line) from None

    raise DecodeError(f"unknown action tag {tag!r}", line)


def encode_log(actions: Iterable[Action]) -> str:
    """Encode actions one per line, in order."""
    return "\n".join(encode(action) for action in actions)


def decode_log(text: str) -> list[Action]:
    """
    Decode a whole log, skipping blank lines.

    Stops at the first bad line; the raised DecodeError carries its
    1-based line number.
    """
    actions: list[Action] = []
    # Only "\n" ends a record; str.splitlines would also break on \x0c, \u2028 etc.
    for number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            actions.append(decode(line))
        except DecodeError as e:
            raise e.at_line(number) from None
    return actions
