"""
Vocab Codex CLI - track and drill your personal vocabulary.

Usage:
    vocab session                  # Open a codex and introduce/practice in a loop
    vocab introduce -f words.codex # Add words interactively until !done
    vocab practice -n 5            # Drill the 5 least-known words
    vocab add chat "a cat" -c unknown  # Add one word without prompting
    vocab stats                    # Show every word with its score
    vocab check                    # Verify a codex file parses and replays
"""

from __future__ import annotations

import random
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import Settings, get_settings
from vocab.core import (
    Codex,
    CodexError,
    Confidence,
    DecodeError,
    IntroduceAction,
    InvalidFieldError,
    PersistenceFailure,
    PracticeAction,
    PracticeOnUnknownWord,
    validate_definition,
    validate_word,
)

from . import prompts

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="vocab",
    help="Vocab Codex - track and drill your personal vocabulary",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

FileOption = Annotated[
    Optional[Path],
    typer.Option("--file", "-f", help="Codex file (defaults to VOCAB_CODEX_PATH)"),
]


class MainAction(str, Enum):
    EXIT = "exit"
    INTRODUCE = "introduce"
    PRACTICE = "practice"


MAIN_CHOICES = {
    "quit": MainAction.EXIT,
    "q": MainAction.EXIT,
    "exit": MainAction.EXIT,
    "introduce": MainAction.INTRODUCE,
    "i": MainAction.INTRODUCE,
    "practice": MainAction.PRACTICE,
    "p": MainAction.PRACTICE,
}


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Route loguru output to stderr (and the optional log file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """Vocab Codex - track and drill your personal vocabulary."""
    configure_logging(get_settings(), verbose)


# =============================================================================
# Helpers
# =============================================================================


def _error(message: str) -> typer.Exit:
    console.print(Panel(f"[bold red]{escape(message)}[/bold red]", border_style="red"))
    return typer.Exit(code=1)


def _new_codex(settings: Settings) -> Codex:
    return Codex(random.Random(), fuzz=settings.selection_fuzz)


def _open_codex(path: Path, settings: Settings, must_exist: bool = False) -> Codex:
    """Load the codex at `path`; a missing file gives an empty codex unless `must_exist`."""
    if not path.exists():
        if must_exist:
            raise _error(f"No codex file at {path}")
        console.print(f"[dim]{path} does not exist yet; starting an empty codex.[/dim]")
        return _new_codex(settings)

    try:
        return Codex.from_file(path, random.Random(), fuzz=settings.selection_fuzz)
    except DecodeError as e:
        raise _error(f"Could not parse {path}: {e}")
    except PracticeOnUnknownWord as e:
        raise _error(f"Corrupted codex {path}: {e}")
    except OSError as e:
        raise _error(f"Could not read {path}: {e}")


def _save_codex(codex: Codex, path: Path, settings: Settings) -> None:
    console.print(f"Saving to {path}...")
    try:
        result = codex.to_file(path, settings.backup_path)
    except PersistenceFailure as e:
        raise _error(f"Save failed: {e}")

    if result.used_fallback:
        console.print(
            f"[yellow]Something went wrong writing {path}... "
            f"saved to {result.path} instead.[/yellow]"
        )
    else:
        console.print("[green]Done![/green]")


# =============================================================================
# Activities
# =============================================================================


def run_introduce(codex: Codex) -> int:
    """Introduce words until the user types !done. Returns the number added."""
    console.print(f"Introducing new vocab. Type \"{prompts.DONE_COMMAND}\" to finish.")
    added = 0

    while True:
        word = prompts.ask_word(console, codex)
        if word is None:
            break

        definition = prompts.ask_definition(console)
        if definition is None:
            break

        confidence = prompts.ask_confidence(console)
        codex.process_action(IntroduceAction(word, confidence, definition))
        added += 1
        console.print(f"[green]Added \"{word}\" to codex[/green]")

    console.print("Finished introducing words.")
    return added


def run_practice(codex: Codex, count: int) -> int:
    """Drill a practice set. Returns the number of words practiced."""
    practice_set = codex.generate_practice_set(count)
    if not practice_set:
        console.print("[yellow]No words to practice yet. Introduce some first![/yellow]")
        return 0

    console.print(f"Practicing {len(practice_set)} word(s).")
    for index, (word, definition) in enumerate(practice_set, start=1):
        console.print(
            Panel(
                f"[bold]{escape(word)}[/bold]",
                title=f"[cyan]WORD {index}/{len(practice_set)}[/cyan]",
                border_style="cyan",
                box=box.HEAVY,
            )
        )
        Prompt.ask("Recall the definition, then press Enter", console=console, default="", show_default=False)
        console.print(Panel(escape(definition), title="[green]DEFINITION[/green]", border_style="green"))

        correctness = prompts.ask_correctness(console)
        codex.process_action(PracticeAction(word, correctness))

    console.print("[green]Practice round complete.[/green]")
    return len(practice_set)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def session(
    file: FileOption = None,
    count: Annotated[
        Optional[int], typer.Option("--count", "-n", min=0, help="Words per practice round")
    ] = None,
) -> None:
    """
    Open (or create) a codex and introduce or practice words in a loop.

    The whole log is saved back to the same file on exit.
    """
    settings = get_settings()
    console.print("[bold cyan]Welcome to Vocab Codex![/bold cyan]")

    if file is None:
        console.print("First, we'll need to open (or create) a codex file.")
        file = prompts.ask_codex_path(console, settings.codex_path)

    codex = _open_codex(file, settings)
    console.print(f"File opened. {codex.word_count()} word(s) in codex.")
    round_size = settings.practice_set_size if count is None else count

    try:
        while True:
            choice = prompts.ask_choice(
                console,
                "What would you like to do next? (introduce/practice/quit)",
                MAIN_CHOICES,
                reprompt="Sorry, I didn't understand that...",
            )
            if choice is MainAction.EXIT:
                console.print("Saving and Exiting.")
                break
            if choice is MainAction.INTRODUCE:
                run_introduce(codex)
            else:
                run_practice(codex, round_size)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")

    _save_codex(codex, file, settings)


@app.command()
def introduce(file: FileOption = None) -> None:
    """Add words interactively until you type !done."""
    settings = get_settings()
    path = file or settings.codex_path
    codex = _open_codex(path, settings)

    try:
        added = run_introduce(codex)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        added = None

    if added == 0:
        return
    _save_codex(codex, path, settings)


@app.command()
def practice(
    file: FileOption = None,
    count: Annotated[
        Optional[int], typer.Option("--count", "-n", min=0, help="Words to drill")
    ] = None,
) -> None:
    """Drill the least-known words and record how well you recalled each."""
    settings = get_settings()
    path = file or settings.codex_path
    codex = _open_codex(path, settings, must_exist=True)

    try:
        practiced = run_practice(codex, settings.practice_set_size if count is None else count)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        practiced = None

    if practiced == 0:
        return
    _save_codex(codex, path, settings)


@app.command()
def add(
    word: Annotated[str, typer.Argument(help="Word to introduce")],
    definition: Annotated[str, typer.Argument(help="Its definition")],
    confidence: Annotated[
        Confidence,
        typer.Option("--confidence", "-c", case_sensitive=False, help="How well you know it"),
    ] = Confidence.UNKNOWN,
    file: FileOption = None,
) -> None:
    """Introduce a single word without prompting."""
    settings = get_settings()
    path = file or settings.codex_path

    try:
        word = validate_word(word)
        definition = validate_definition(definition)
    except InvalidFieldError as e:
        raise _error(str(e))

    codex = _open_codex(path, settings)
    if codex.contains(word):
        console.print(f"[yellow]Note: overwriting existing entry for \"{word}\".[/yellow]")
    codex.process_action(IntroduceAction(word, confidence, definition))
    _save_codex(codex, path, settings)


@app.command()
def stats(file: FileOption = None) -> None:
    """Show every word with its knowledge score, least-known first."""
    settings = get_settings()
    path = file or settings.codex_path
    codex = _open_codex(path, settings, must_exist=True)

    entries = codex.entries()
    if not entries:
        console.print("[yellow]Codex is empty.[/yellow]")
        return

    table = Table(title=f"[bold cyan]CODEX: {path}[/bold cyan]", box=box.HEAVY)
    table.add_column("Word", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Practiced", justify="right")
    table.add_column("Definition", style="dim")

    for entry in entries:
        score = entry.knowledge_score
        color = "green" if score >= 0.8 else "yellow" if score >= 0.5 else "red"
        table.add_row(
            escape(entry.word),
            f"[{color}]{score:.3f}[/{color}]",
            str(entry.practice_count),
            escape(entry.definition),
        )

    console.print(table)
    console.print(f"{codex.word_count()} words, {len(codex.history)} actions logged.")


@app.command()
def check(file: FileOption = None) -> None:
    """Verify that a codex file parses and replays cleanly."""
    settings = get_settings()
    path = file or settings.codex_path

    if not path.exists():
        raise _error(f"No codex file at {path}")

    try:
        codex = Codex.from_file(path)
    except CodexError as e:
        raise _error(f"{path} is invalid: {e}")
    except OSError as e:
        raise _error(f"Could not read {path}: {e}")

    console.print(
        f"[green]OK[/green] {path}: {len(codex.history)} actions, {codex.word_count()} words"
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
