"""
Vocab Codex - a personal vocabulary tracker.

Every learning event is recorded in an append-only log; per-word knowledge
scores are derived by replaying that log.
"""

__version__ = "0.3.0"
