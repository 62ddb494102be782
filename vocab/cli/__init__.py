"""
Command-line interface for Vocab Codex.
"""

from .codex_cli import app, main

__all__ = ["app", "main"]
