"""Tests for the per-language source loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import SourceWriter, make_record
from polydict.core.errors import SourceReadError
from polydict.pipelines.loader import load_source_file, load_sources


def test_load_sources_is_flat_and_ordered(write_sources: SourceWriter) -> None:
    """Records come back file by file, in the order the languages were given."""
    source_dir = write_sources(
        {
            "en": [make_record("w1", "en", "hello"), make_record("w2", "en", "house")],
            "de": [make_record("w1", "de", "hallo")],
        }
    )

    records = load_sources(source_dir, ["de", "en"])

    assert [(r.word_id, r.language) for r in records] == [
        ("w1", "de"),
        ("w1", "en"),
        ("w2", "en"),
    ]


def test_missing_language_file_is_fatal(write_sources: SourceWriter) -> None:
    """No partial-language loading: one missing file aborts the whole load."""
    source_dir = write_sources({"en": [make_record("w1", "en", "hello")]})

    with pytest.raises(SourceReadError) as info:
        load_sources(source_dir, ["en", "it"])

    assert info.value.path.name == "it.json"
    assert "does not exist" in str(info.value)


def test_invalid_json_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "en.json"
    path.write_text("[{not json", encoding="utf-8")

    with pytest.raises(SourceReadError, match="invalid JSON"):
        load_source_file(path)


def test_non_array_root_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "en.json"
    path.write_text('{"wordId": "w1"}', encoding="utf-8")

    with pytest.raises(SourceReadError, match="expected a JSON array"):
        load_source_file(path)


def test_element_with_wrong_shape_is_fatal(tmp_path: Path) -> None:
    """An element without the required `text` field cannot be a RawWordRecord."""
    path = tmp_path / "en.json"
    path.write_text('[{"wordId": "w1", "language": "en"}]', encoding="utf-8")

    with pytest.raises(SourceReadError, match="text"):
        load_source_file(path)


def test_null_word_id_is_not_a_read_error(tmp_path: Path) -> None:
    """Missing identifiers are the grouper's business, not the loader's."""
    path = tmp_path / "en.json"
    path.write_text('[{"wordId": null, "language": "en", "text": "orphan"}]', encoding="utf-8")

    records = load_source_file(path)

    assert records[0].word_id is None
