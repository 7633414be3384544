"""Tests for search index setup."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, inspect, text

from polydict.store.indexes import SEARCH_INDEXES, ensure_indexes
from polydict.store.session import create_store_engine

EXPECTED = [
    "idx_baseword_language",
    "idx_baseword_text",
    "idx_translation_language",
    "idx_translation_text",
]


def _index_names(engine: Engine, table: str) -> set[str]:
    return {str(ix["name"]) for ix in inspect(engine).get_indexes(table)}


def test_search_indexes_are_declared() -> None:
    assert [str(ix.name) for ix in SEARCH_INDEXES] == EXPECTED


def test_ensure_indexes_restores_missing_indexes(tmp_path: Path) -> None:
    engine = create_store_engine(f"sqlite:///{tmp_path / 'idx.db'}")
    try:
        with engine.begin() as conn:
            conn.execute(text("DROP INDEX idx_baseword_text"))
            conn.execute(text("DROP INDEX idx_translation_language"))
        assert "idx_baseword_text" not in _index_names(engine, "base_words")

        names = ensure_indexes(engine)

        assert names == EXPECTED
        assert {"idx_baseword_language", "idx_baseword_text"} <= _index_names(
            engine, "base_words"
        )
        assert {"idx_translation_language", "idx_translation_text"} <= _index_names(
            engine, "translations"
        )
    finally:
        engine.dispose()


def test_ensure_indexes_is_idempotent(tmp_path: Path) -> None:
    engine = create_store_engine(f"sqlite:///{tmp_path / 'idx.db'}")
    try:
        first = ensure_indexes(engine)
        second = ensure_indexes(engine)
    finally:
        engine.dispose()

    assert first == second == EXPECTED
