"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `POLYDICT_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    database_url : str
        SQLAlchemy URL of the dictionary store; maps from `DATABASE_URL`.
    base_language : str
        Language preferred as the base word when reconciling a word group.
    source_dir : Path
        Directory holding one `<lang>.json` file per source language.
    source_languages : list[str]
        Language files read by a migration run, in order.
    seed_file : Path
        Consolidated seed document used by `polydict seed`.
    report_dir : Path
        Where load reports are written when no explicit path is given.
    """

    environment: EnvName = Field(default="dev", alias="POLYDICT_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    database_url: str = Field(default="sqlite:///polydict.db", alias="DATABASE_URL")

    base_language: str = Field(default="en", alias="BASE_LANGUAGE")
    source_dir: Path = Field(default=Path("mock-data/db"), alias="SOURCE_DIR")
    source_languages: list[str] = Field(
        default_factory=lambda: ["en", "de", "it", "es"], alias="SOURCE_LANGUAGES"
    )
    seed_file: Path = Field(default=Path("mock-data/seedDataSets.json"), alias="SEED_FILE")
    report_dir: Path = Field(default=Path("artifacts/runs"), alias="POLYDICT_REPORT_DIR")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("POLYDICT_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "polydict") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
