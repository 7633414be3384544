"""End-to-end tests for the migration pipeline against a temporary SQLite store.

Scenarios
---------
1. **Happy path**: the hello/hallo group becomes one Word with a base word,
   one translation, their definitions and examples.
2. **Idempotence**: a second run skips every group (skip-on-conflict policy).
3. **Dirty data**: null identifiers are dropped; duplicate base-language
   records are counted.
4. **Known gap**: a Word that exists without children is skipped, not repaired.
5. **Failures**: store errors abort the run as PersistenceError.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from conftest import SourceWriter, make_record
from polydict.core.contracts.records import RawWordRecord
from polydict.core.errors import IdentifierConflictError, PersistenceError, SourceReadError
from polydict.pipelines.builder import persist_plan
from polydict.pipelines.grouper import WordGroup, elect_base
from polydict.pipelines.migrate import run_migration
from polydict.store.models import (
    BaseWord,
    Definition,
    Example,
    Translation,
    TranslationDefinition,
    Word,
    WordMetadata,
)
from polydict.store.queries import get_word_by_external_id


def _count(session: Session, model: type) -> int:
    return session.scalar(select(func.count()).select_from(model)) or 0


def make_plan_record(word_id: str, language: str, text: str, **extra: Any) -> RawWordRecord:
    return RawWordRecord.model_validate(make_record(word_id, language, text, **extra))


def test_hello_hallo_scenario(session: Session, write_sources: SourceWriter) -> None:
    source_dir = write_sources(
        {
            "en": [make_record("w1", "en", "hello", definition="greeting", examples=["Hello there"])],
            "de": [make_record("w1", "de", "hallo", definition="Gruß", examples=["Hallo da"])],
        }
    )

    report = run_migration(session, source_dir, ["en", "de"])

    assert (report.groups, report.processed, report.skipped, report.dropped) == (1, 1, 0, 0)
    word = get_word_by_external_id(session, "w1")
    assert word is not None
    assert word.base_word is not None
    assert word.base_word.text == "hello"
    assert word.base_word.language == "en"

    assert [d.text for d in word.definitions] == ["greeting"]
    assert [e.text for e in word.definitions[0].examples] == ["Hello there"]

    assert [t.text for t in word.translations] == ["hallo"]
    translation = word.translations[0]
    assert translation.language == "de"
    assert [d.text for d in translation.definitions] == ["Gruß"]
    assert [e.text for e in translation.definitions[0].examples] == ["Hallo da"]

    assert _count(session, Word) == 1
    assert _count(session, Example) == 2


def test_languages_are_stored_lower_case(session: Session, write_sources: SourceWriter) -> None:
    source_dir = write_sources(
        {"en": [make_record("w1", "EN", "hello")], "de": [make_record("w1", "De", "hallo")]}
    )

    run_migration(session, source_dir, ["en", "de"])

    assert session.scalars(select(BaseWord.language)).all() == ["en"]
    assert session.scalars(select(Translation.language)).all() == ["de"]


def test_metadata_is_linked_to_the_word(session: Session, write_sources: SourceWriter) -> None:
    meta = {
        "counterWords": 2,
        "cumulativeFrequency": 0.5,
        "entryDate": "2024-03-01T00:00:00Z",
        "relatedTerms": ["goodbye"],
        "source": "mock",
    }
    source_dir = write_sources({"en": [make_record("w1", "en", "hello", metadata=meta)]})

    run_migration(session, source_dir, ["en"])

    word = get_word_by_external_id(session, "w1")
    assert word is not None and word.word_metadata is not None
    assert word.word_metadata.counter_words == 2
    assert word.word_metadata.related_terms == ["goodbye"]
    assert word.word_metadata.entry_date is not None
    assert _count(session, WordMetadata) == 1


def test_every_example_string_becomes_exactly_one_example(
    session: Session, write_sources: SourceWriter
) -> None:
    en_examples = ["a house", "the house", "my house"]
    de_examples = ["ein Haus", "das Haus"]
    source_dir = write_sources(
        {
            "en": [make_record("w1", "en", "house", examples=en_examples)],
            "de": [make_record("w1", "de", "Haus", examples=de_examples)],
        }
    )

    run_migration(session, source_dir, ["en", "de"])

    base_examples = session.scalars(
        select(Example.text).join(Definition, Example.definition_id == Definition.id)
    ).all()
    translation_examples = session.scalars(
        select(Example.text).join(
            TranslationDefinition,
            Example.translation_definition_id == TranslationDefinition.id,
        )
    ).all()
    assert sorted(base_examples) == sorted(en_examples)
    assert sorted(translation_examples) == sorted(de_examples)


def test_second_run_skips_every_group(session: Session, write_sources: SourceWriter) -> None:
    """Idempotence under skip-on-conflict: Word count after two runs == after one."""
    source_dir = write_sources(
        {
            "en": [make_record("w1", "en", "hello"), make_record("w2", "en", "house")],
            "de": [make_record("w1", "de", "hallo"), make_record("w2", "de", "Haus")],
        }
    )

    first = run_migration(session, source_dir, ["en", "de"])
    counts_after_first = (_count(session, Word), _count(session, Translation))
    second = run_migration(session, source_dir, ["en", "de"])

    assert first.processed == 2
    assert (second.processed, second.skipped) == (0, 2)
    assert second.skipped_ids == ["w1", "w2"]
    assert (_count(session, Word), _count(session, Translation)) == counts_after_first


def test_null_word_id_is_dropped(session: Session, write_sources: SourceWriter) -> None:
    source_dir = write_sources(
        {"en": [make_record(None, "en", "orphan"), make_record("w1", "en", "hello")]}
    )

    report = run_migration(session, source_dir, ["en"])

    assert report.dropped == 1
    assert report.processed == 1
    assert session.scalars(select(BaseWord.text)).all() == ["hello"]


def test_base_collisions_are_reported(session: Session, write_sources: SourceWriter) -> None:
    source_dir = write_sources(
        {
            "en": [make_record("w1", "en", "hello"), make_record("w1", "en", "hullo")],
            "de": [make_record("w1", "de", "hallo")],
        }
    )

    report = run_migration(session, source_dir, ["en", "de"])

    assert report.base_collisions == 1
    assert session.scalars(select(Translation.text)).all() == ["hallo"]


def test_conflict_skips_the_whole_group(session: Session) -> None:
    """Nothing from a conflicting group is written, not even its metadata."""
    session.add(Word(word_id="w1"))
    session.commit()
    group = WordGroup(
        "w1",
        (
            make_plan_record("w1", "en", "hello", metadata={"counterWords": 1}),
            make_plan_record("w1", "de", "hallo"),
        ),
    )

    with pytest.raises(IdentifierConflictError):
        persist_plan(session, elect_base(group))

    assert _count(session, Word) == 1
    assert _count(session, WordMetadata) == 0
    assert _count(session, BaseWord) == 0
    assert _count(session, Translation) == 0


def test_partially_written_word_is_not_repaired_on_rerun(
    session: Session, write_sources: SourceWriter
) -> None:
    """Known gap: a Word that exists without children stays without children.

    Conflict detection only looks at the identifier, so an earlier run that
    stopped after creating the Word leaves a childless Word behind.
    """
    session.add(Word(word_id="w1"))
    session.commit()
    source_dir = write_sources({"en": [make_record("w1", "en", "hello", examples=["Hi"])]})

    report = run_migration(session, source_dir, ["en"])

    assert report.skipped == 1
    word = get_word_by_external_id(session, "w1")
    assert word is not None
    assert word.base_word is None
    assert word.definitions == []


def test_missing_source_file_aborts_before_writing(
    session: Session, write_sources: SourceWriter
) -> None:
    source_dir = write_sources({"en": [make_record("w1", "en", "hello")]})

    with pytest.raises(SourceReadError):
        run_migration(session, source_dir, ["en", "de"])

    assert _count(session, Word) == 0


def test_store_failure_aborts_the_run(session: Session, write_sources: SourceWriter) -> None:
    """Any store error other than a conflict ends the run; nothing is retried."""
    source_dir = write_sources(
        {"en": [make_record("w1", "en", "hello"), make_record("w2", "en", "house")]}
    )
    failure = OperationalError("INSERT", {}, Exception("disk I/O error"))

    with patch.object(session, "commit", side_effect=failure) as commit:
        with pytest.raises(PersistenceError, match="w1"):
            run_migration(session, source_dir, ["en"])

    assert commit.call_count == 1
    assert _count(session, Word) == 0


def test_word_inserted_by_another_writer_is_a_conflict(
    session: Session, write_sources: SourceWriter
) -> None:
    """The lookup misses w1, the insert hits the unique key: skip it and carry on."""
    session.add(Word(word_id="w1"))
    session.commit()
    source_dir = write_sources(
        {
            "en": [
                make_record("w1", "en", "hello", metadata={"counterWords": 1}),
                make_record("w2", "en", "house"),
            ]
        }
    )

    # w1: lookup misses, re-check after the failed insert finds it; w2: lookup misses.
    with patch("polydict.pipelines.builder.word_exists", side_effect=[False, True, False]):
        report = run_migration(session, source_dir, ["en"])

    assert (report.processed, report.skipped, report.skipped_ids) == (1, 1, ["w1"])
    assert _count(session, Word) == 2
    assert _count(session, WordMetadata) == 0
    assert session.scalars(select(BaseWord.text)).all() == ["house"]


def test_other_integrity_error_is_not_a_conflict(session: Session) -> None:
    group = WordGroup("w1", (make_plan_record("w1", "en", "hello"),))
    failure = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))

    with patch("polydict.pipelines.builder.word_exists", return_value=False):
        with patch.object(session, "flush", side_effect=failure):
            with pytest.raises(PersistenceError, match="w1"):
                persist_plan(session, elect_base(group))

    assert _count(session, Word) == 0
