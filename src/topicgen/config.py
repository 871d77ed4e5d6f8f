"""Configuration settings for topicgen.

Resolution order: CLI option > environment (TOPICGEN_*) / .env > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TOPICGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Root folder for generated output
    base_path: Path = Field(default=Path("."))

    # Registry definition (.yaml/.yml/.json/.py); None means the bundled playbook
    registry_path: Path | None = None

    # Prompt template; None means the bundled topic prompt
    template_path: Path | None = None

    fail_fast: bool = False
    index_scope: Literal["global", "section"] = "global"
    index_width: int = Field(default=2, ge=1)
    concurrency: int = Field(default=1, ge=1)

    # JSONL run logs are only written when set
    log_dir: Path | None = None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
