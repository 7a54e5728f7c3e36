"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "SupportHER"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # --- Storage ---
    store_path: Path = Path("supporther_store.json")

    # --- Cycle model ---
    cycle_config_path: Path | None = None  # None = bundled cycle_config.yaml

    model_config = SettingsConfigDict(
        env_prefix="SUPPORTHER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure root logging for the process and return the package logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )
    return logging.getLogger("supporther")
