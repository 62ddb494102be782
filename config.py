"""
Configuration settings for vocab-codex.

Uses Pydantic Settings for environment variable management with .env file support.
All variables use the VOCAB_ prefix, e.g. VOCAB_CODEX_PATH=~/words.codex
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VOCAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Codex files
    # ========================================
    codex_path: Path = Field(
        default=Path("vocab.codex"),
        description="Codex log file opened when --file is not given",
    )
    backup_path: Path = Field(
        default=Path("backup.codex"),
        description="Fallback location used when the codex file cannot be written",
    )

    # ========================================
    # Practice
    # ========================================
    practice_set_size: int = Field(
        default=10,
        ge=0,
        description="Words per practice round",
    )
    selection_fuzz: float = Field(
        default=0.05,
        ge=0.0,
        le=0.5,
        description="Half-width of the uniform noise added to scores when ranking words",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level for stderr",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("codex_path", "backup_path", mode="after")
    @classmethod
    def expand_user(cls, value: Path) -> Path:
        """Expand a leading ~ in configured file paths."""
        return value.expanduser()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
