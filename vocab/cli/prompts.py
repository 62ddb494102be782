"""
Interactive prompts for the codex CLI.

Everything here only collects and validates text typed by the user. Words
and definitions are checked against the log format before an action is
built from them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from vocab.core import Codex, Confidence, Correctness, InvalidFieldError
from vocab.core import validate_definition, validate_word

T = TypeVar("T")

DONE_COMMAND = "!done"

CONFIDENCE_CHOICES: dict[str, Confidence] = {
    "Known": Confidence.KNOWN,
    "known": Confidence.KNOWN,
    "k": Confidence.KNOWN,
    "Partial": Confidence.PARTIALLY_KNOWN,
    "partial": Confidence.PARTIALLY_KNOWN,
    "p": Confidence.PARTIALLY_KNOWN,
    "Unknown": Confidence.UNKNOWN,
    "unknown": Confidence.UNKNOWN,
    "u": Confidence.UNKNOWN,
}

CORRECTNESS_CHOICES: dict[str, Correctness] = {
    "correct": Correctness.CORRECT,
    "c": Correctness.CORRECT,
    "y": Correctness.CORRECT,
    "partial": Correctness.PARTIALLY_CORRECT,
    "p": Correctness.PARTIALLY_CORRECT,
    "incorrect": Correctness.INCORRECT,
    "i": Correctness.INCORRECT,
    "n": Correctness.INCORRECT,
}


def ask_choice(
    console: Console,
    question: str,
    choices: Mapping[str, T],
    reprompt: str = "Unrecognized option.",
) -> T:
    """Ask until the answer matches one of the choice aliases."""
    while True:
        answer = Prompt.ask(question, console=console).strip()
        if answer in choices:
            return choices[answer]
        if reprompt:
            console.print(f"[yellow]{reprompt}[/yellow]")


def ask_validated(
    console: Console,
    question: str,
    validator: Callable[[str], str],
    allow_done: bool = True,
) -> str | None:
    """
    Ask until `validator` accepts the answer.

    Returns None if `allow_done` is set and the user typed !done.
    """
    while True:
        answer = Prompt.ask(question, console=console)
        if allow_done and answer.strip() == DONE_COMMAND:
            return None
        try:
            return validator(answer)
        except InvalidFieldError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")


def ask_word(console: Console, codex: Codex) -> str | None:
    """Ask for a new word; None means the user is done."""
    word = ask_validated(console, f"Type a word to add (or {DONE_COMMAND})", validate_word)
    if word is not None and codex.contains(word):
        console.print(
            f"[yellow]Note: \"{escape(word)}\" already in codex. This will overwrite it. "
            f"Type {DONE_COMMAND} to abort.[/yellow]"
        )
    return word


def ask_definition(console: Console) -> str | None:
    return ask_validated(console, "Type the definition", validate_definition)


def ask_confidence(console: Console) -> Confidence:
    console.print("[dim]k=known, p=partially known, u=unknown[/dim]")
    return ask_choice(console, "How confidently do you know this word?", CONFIDENCE_CHOICES)


def ask_correctness(console: Console) -> Correctness:
    console.print("[dim]c=correct, p=partially correct, i=incorrect[/dim]")
    return ask_choice(console, "How well did you recall it?", CORRECTNESS_CHOICES)


def ask_codex_path(console: Console, default: Path | None = None) -> Path:
    """
    Ask for a codex file path, offering to create the file if it is missing.

    The returned path always names an existing file.
    """
    while True:
        raw = Prompt.ask(
            "Enter a file path",
            console=console,
            default=str(default) if default else None,
        )
        if not raw or not raw.strip():
            continue
        path = Path(raw.strip()).expanduser()

        parent = path.parent
        if str(parent) not in ("", ".") and not parent.is_dir():
            console.print(f"[red]Invalid Directory: {parent}[/red]")
            continue

        if path.is_file():
            return path

        if Confirm.ask("That file does not exist. Should we create it?", console=console):
            try:
                path.touch()
            except OSError as e:
                console.print(f"[red]Could not create {escape(str(path))}: {escape(str(e))}[/red]")
                continue
            return path
