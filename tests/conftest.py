"""Shared fixtures: a temporary SQLite store and a source-file writer."""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.orm import Session

from polydict.store.session import open_store

SourceWriter = Callable[[dict[str, list[dict[str, Any]]]], Path]


@pytest.fixture  # type: ignore[misc]
def db_url(tmp_path: Path) -> str:
    """URL of an empty, file-backed SQLite store private to the test."""
    return f"sqlite:///{tmp_path / 'dictionary.db'}"


@pytest.fixture  # type: ignore[misc]
def session(db_url: str) -> Generator[Session, None, None]:
    with open_store(db_url) as s:
        yield s


@pytest.fixture  # type: ignore[misc]
def write_sources(tmp_path: Path) -> SourceWriter:
    """Return a helper that writes `{lang: [records]}` as `<lang>.json` files."""
    source_dir = tmp_path / "sources"
    source_dir.mkdir()

    def _write(files: dict[str, list[dict[str, Any]]]) -> Path:
        for code, records in files.items():
            (source_dir / f"{code}.json").write_text(
                json.dumps(records, ensure_ascii=False), encoding="utf-8"
            )
        return source_dir

    return _write


def make_record(
    word_id: str | None,
    language: str,
    text: str,
    *,
    definition: str = "meaning",
    examples: list[Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw source record in wire (camelCase) form."""
    record: dict[str, Any] = {
        "wordId": word_id,
        "language": language,
        "text": text,
        "article": None,
        "stem": None,
        "phonetics": None,
        "definitions": [
            {"text": definition, "synonyms": [], "examples": examples or []},
        ],
    }
    record.update(extra)
    return record
