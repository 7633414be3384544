"""Smoke tests for the settings loader.

These tests verify three guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from polydict.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_defaults_cover_the_load_pipeline(monkeypatch: Any) -> None:
    """Without overrides the loader reads en/de/it/es and prefers English."""
    for name in ("BASE_LANGUAGE", "SOURCE_LANGUAGES", "SOURCE_DIR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)

    assert s.base_language == "en"
    assert s.source_languages == ["en", "de", "it", "es"]
    assert s.source_dir == Path("mock-data/db")


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("POLYDICT_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("SOURCE_LANGUAGES", '["de", "en"]')

    load_settings.cache_clear()
    try:
        s = load_settings()
        assert s.environment == "test"
        assert s.log_level == "DEBUG"
        assert s.database_url == "sqlite:///:memory:"
        assert s.source_languages == ["de", "en"]
    finally:
        monkeypatch.undo()
        load_settings.cache_clear()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    load_settings.cache_clear()
    try:
        logger = get_logger("polydict.tests.settings")
        assert logger.level == logging.ERROR
        assert logger.handlers, "Expected at least one StreamHandler to be attached."
    finally:
        monkeypatch.undo()
        load_settings.cache_clear()
