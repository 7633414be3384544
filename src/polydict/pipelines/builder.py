"""Entity builder: persist one :class:`WordPlan` as a full entity graph.

Write order for one plan:

1. WordMetadata (when the base record has a metadata block).
2. Word, keyed by the external identifier and linked to the metadata.
3. BaseWord, language lower-cased, linked back to the Word.
4. One Definition per base definition, one Example per example.
5. One Translation per candidate, with TranslationDefinitions and Examples.

Conflict policy
---------------
Identifiers are unique. If a Word with the plan's identifier already exists
the whole plan is **skipped**: nothing is written and
:class:`IdentifierConflictError` is raised for the caller to count. Words are
never reused and topped up. A Word that exists without children therefore
stays that way on re-run.

Every other store failure is rolled back and re-raised as
:class:`PersistenceError`. A plan is committed as one unit.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from polydict.core.contracts.language import parse_language, parse_word_type
from polydict.core.contracts.records import (
    LanguageSpecificNotes,
    RawDefinition,
    RawExample,
    RawMetadata,
    RawWordRecord,
)
from polydict.core.errors import IdentifierConflictError, PersistenceError
from polydict.core.settings import get_logger
from polydict.store.models import (
    BaseWord,
    Definition,
    Example,
    ExampleSource,
    LanguageSpecific,
    Translation,
    TranslationDefinition,
    Word,
    WordMetadata,
)

from .grouper import WordPlan

logger = get_logger("polydict.pipelines.builder")


# --------------------------------------------------------------------------- #
# Row factories
# --------------------------------------------------------------------------- #


def _metadata(raw: RawMetadata) -> WordMetadata:
    return WordMetadata(
        counter_words=raw.counter_words,
        cumulative_frequency=raw.cumulative_frequency,
        entry_date=raw.entry_date,
        related_terms=list(raw.related_terms),
        source=raw.source,
    )


def _language_specific(raw: LanguageSpecificNotes | None) -> LanguageSpecific | None:
    if raw is None:
        return None
    return LanguageSpecific(usage_notes=raw.usage_notes)


def _example(raw: RawExample) -> Example:
    source = None
    if raw.source is not None:
        source = ExampleSource(
            title=raw.source.title,
            publication=raw.source.publication,
            date=raw.source.date,
        )
    return Example(text=raw.text, source=source)


def _definition(raw: RawDefinition) -> Definition:
    return Definition(
        definition_id=raw.definition_id,
        text=raw.text,
        synonyms=list(raw.synonyms),
        examples=[_example(e) for e in raw.examples],
    )


def _translation_definition(raw: RawDefinition) -> TranslationDefinition:
    return TranslationDefinition(
        text=raw.text,
        synonyms=list(raw.synonyms),
        examples=[_example(e) for e in raw.examples],
    )


def _base_word(raw: RawWordRecord) -> BaseWord:
    word_type = parse_word_type(raw.word_type)
    return BaseWord(
        text=raw.text,
        language=parse_language(raw.language).value,
        article=raw.article or None,
        stem=raw.stem or None,
        prefix=raw.prefix or None,
        phonetics=raw.phonetics or None,
        word_type=word_type.value if word_type else None,
        language_specific=_language_specific(raw.language_specific),
    )


def _translation(raw: RawWordRecord) -> Translation:
    return Translation(
        text=raw.text,
        language=parse_language(raw.language).value,
        article=raw.article or None,
        stem=raw.stem or None,
        prefix=raw.prefix or None,
        phonetics=raw.phonetics or None,
        language_specific=_language_specific(raw.language_specific),
        definitions=[_translation_definition(d) for d in raw.definitions],
    )


# --------------------------------------------------------------------------- #
# Persistence
# --------------------------------------------------------------------------- #


def word_exists(session: Session, word_id: str) -> bool:
    return session.scalar(select(Word.id).where(Word.word_id == word_id)) is not None


def _create_word(session: Session, plan: WordPlan) -> Word:
    """Steps 1-2: metadata then Word. Raises IdentifierConflictError on a duplicate id."""
    if word_exists(session, plan.word_id):
        raise IdentifierConflictError(plan.word_id)

    metadata = _metadata(plan.base.metadata) if plan.base.metadata is not None else None
    word = Word(word_id=plan.word_id, word_metadata=metadata)
    session.add(word)
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        # Only a Word written by another run since the lookup is a conflict.
        if word_exists(session, plan.word_id):
            raise IdentifierConflictError(plan.word_id) from exc
        raise PersistenceError(f"Failed to persist word {plan.word_id!r}: {exc}") from exc
    return word


def persist_plan(session: Session, plan: WordPlan) -> Word:
    """Write the entity graph for ``plan`` and commit it.

    Raises
    ------
    IdentifierConflictError
        A Word with ``plan.word_id`` already exists; nothing was written.
    PersistenceError
        Any other store failure; the plan's writes were rolled back.
    ValidationGap
        A language code is outside the closed table; nothing was written.
    """
    # Build the rows first so that a bad language code fails before any write.
    base_word = _base_word(plan.base)
    definitions = [_definition(d) for d in plan.base.definitions]
    translations = [_translation(t) for t in plan.translations]

    try:
        word = _create_word(session, plan)

        word.base_word = base_word
        word.definitions.extend(definitions)
        word.translations.extend(translations)

        session.commit()
    except IdentifierConflictError:
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"Failed to persist word {plan.word_id!r}: {exc}") from exc

    logger.info("Migrated group: %s (%s)", plan.word_id, plan.base.text)
    return word


__all__ = ["persist_plan", "word_exists"]
