"""Allow running as: python -m vocab.cli"""

from .codex_cli import main

main()
