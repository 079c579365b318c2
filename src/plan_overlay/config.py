"""Runtime settings, read from ``PLAN_OVERLAY_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLAN_OVERLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    store_path: Path = Field(
        default=Path.home() / ".plan_overlay" / "store.json",
        description="JSON file backing the key-value store",
    )

    # Logging
    log_level: str = "WARNING"

    # Form limits
    max_floor_count: int = Field(default=50, ge=1)
    max_apartments_per_floor: int = Field(default=99, ge=0)
    max_spaces_per_section: int = Field(default=200, ge=0)


def get_settings() -> Settings:
    """Fresh settings; picks up environment changes made since the last call."""
    return Settings()
