"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import get_settings  # noqa: E402

SAMPLE_LOG = "\n".join([
    "introduce$dog$known$a canine",
    "introduce$cat$unknown$a small feline",
    "practice$dog$incorrect",
    "introduce$owl$partially_known$a nocturnal bird of prey",
    "practice$cat$correct",
    "practice$owl$partially_correct",
])


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (use the filesystem)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def setup_logging():
    """Send loguru output to stderr at DEBUG for the duration of a test."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG", format="<level>{level: <8}</level> | {message}")

    yield

    logger.remove()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded randomness source so practice selection is reproducible."""
    return random.Random(1234)


@pytest.fixture
def sample_log():
    """A small well-formed codex log."""
    return SAMPLE_LOG


@pytest.fixture
def codex_file(tmp_path, sample_log):
    """Write the sample log to a temporary codex file."""
    path = tmp_path / "words.codex"
    path.write_text(sample_log, encoding="utf-8")
    return path


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    """Point the settings at temporary files and reset the cached instance."""
    monkeypatch.setenv("VOCAB_CODEX_PATH", str(tmp_path / "default.codex"))
    monkeypatch.setenv("VOCAB_BACKUP_PATH", str(tmp_path / "backup.codex"))
    monkeypatch.setenv("VOCAB_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("VOCAB_LOG_FILE", raising=False)
    get_settings.cache_clear()

    yield get_settings()

    get_settings.cache_clear()
