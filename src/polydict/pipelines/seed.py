"""Seed pipeline: one consolidated document of fully nested words.

This is the alternate load path. Seed words already know their base word and
translations, so the grouper is bypassed: each seed word is converted straight
into a :class:`WordPlan` and handed to the same builder (and the same
skip-on-conflict policy) as the migration.

Seed words without a ``wordId`` get a deterministic one,
``word_<base text>_<base language>`` (lower-cased, whitespace to ``_``), so
seeding the same document twice does not duplicate words.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.orm import Session

from polydict.core.contracts.language import parse_language
from polydict.core.contracts.records import RawDefinition, RawMetadata, RawWordRecord
from polydict.core.contracts.seed import SeedDocument, SeedEntry, SeedWord
from polydict.core.errors import IdentifierConflictError, SourceReadError, ValidationGap
from polydict.core.settings import get_logger

from .builder import persist_plan
from .grouper import WordPlan
from .loader import read_json
from .report import LoadReport

logger = get_logger("polydict.pipelines.seed")

_WHITESPACE = re.compile(r"\s+")


def load_seed_document(path: Path) -> SeedDocument:
    """Read and validate the seed file; any failure is a SourceReadError."""
    data = read_json(path)
    try:
        return SeedDocument.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise SourceReadError(path, f"{where}: {first['msg']}") from exc


def derive_word_id(entry: SeedEntry) -> str:
    text = _WHITESPACE.sub("_", entry.text.strip().lower())
    return f"word_{text}_{parse_language(entry.language).value}"


def _record(
    word_id: str,
    entry: SeedEntry,
    definitions: list[RawDefinition],
    metadata: RawMetadata | None = None,
) -> RawWordRecord:
    """Flatten one seed entry into the raw record shape the builder consumes."""
    return RawWordRecord(
        word_id=word_id,
        language=parse_language(entry.language).value,
        text=entry.text,
        article=entry.article,
        stem=entry.stem,
        prefix=entry.prefix,
        phonetics=entry.phonetics,
        word_type=entry.word_type,
        language_specific=entry.language_specific,
        definitions=list(definitions),
        metadata=metadata,
    )


def plan_from_seed(word: SeedWord) -> WordPlan:
    """Convert one seed word into a plan. Raises ValidationGap on an unmapped language."""
    word_id = word.word_id or derive_word_id(word.base_word)
    base = _record(word_id, word.base_word, word.definitions, word.metadata)
    translations = tuple(_record(word_id, t, t.definitions) for t in word.translations)
    return WordPlan(word_id=word_id, base=base, translations=translations)


def run_seed(session: Session, seed_file: Path) -> LoadReport:
    """Persist every word of ``seed_file``; returns the run totals."""
    report = LoadReport(kind="seed")
    document = load_seed_document(seed_file)
    logger.info("Found %d words to seed", len(document.words))

    for index, seed_word in enumerate(document.words, start=1):
        try:
            plan = plan_from_seed(seed_word)
        except ValidationGap as exc:
            logger.warning("Skipping seed word %r: %s", seed_word.base_word.text, exc)
            report.dropped += 1
            continue

        report.groups += 1
        try:
            persist_plan(session, plan)
        except IdentifierConflictError:
            logger.warning("Word %s already exists; skipping", plan.word_id)
            report.skipped += 1
            report.skipped_ids.append(plan.word_id)
            continue
        report.processed += 1
        logger.info("Created word %s (%d/%d)", plan.base.text, index, len(document.words))

    logger.info(
        "Seeding completed: %d created, %d skipped, %d dropped",
        report.processed,
        report.skipped,
        report.dropped,
    )
    return report


__all__ = ["load_seed_document", "derive_word_id", "plan_from_seed", "run_seed"]
