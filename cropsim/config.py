"""Package settings loaded from environment variables via pydantic-settings.

Engine coefficients (stage ranges, health weights, risk margins) are crop
data and live in :mod:`cropsim.core.crops`; this module only configures the
ambient concerns: logging and the collaborator payload limits.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """All values can be overridden with ``CROPSIM_*`` env vars or .env."""

    model_config = SettingsConfigDict(
        env_prefix="CROPSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------
    # Logging
    # -------------------------
    log_level: str = "info"
    log_format: LogFormat = LogFormat.console

    # -------------------------
    # Image analysis payloads
    # -------------------------
    image_max_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    image_mime_types: Tuple[str, ...] = ("jpeg", "jpg", "png", "webp", "gif")

    # -------------------------
    # Chat payloads
    # -------------------------
    chat_max_messages: int = Field(default=50, gt=0)
    chat_max_message_bytes: int = Field(default=10 * 1024, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
