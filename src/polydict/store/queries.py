"""Read-side queries used by the HTTP layer.

All functions take the session explicitly and eagerly load the parts of the
entity graph their callers serialize, so responses never trigger lazy loads
after the request's session is closed.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from polydict.core.contracts.language import Language

from .models import BaseWord, Definition, Example, Translation, TranslationDefinition, Word


def _summary_options() -> list[LoaderOption]:
    return [
        selectinload(Word.base_word),
        selectinload(Word.translations),
    ]


def _tree_options() -> list[LoaderOption]:
    """Load a Word with everything underneath it."""
    return [
        selectinload(Word.base_word).selectinload(BaseWord.language_specific),
        selectinload(Word.word_metadata),
        selectinload(Word.definitions)
        .selectinload(Definition.examples)
        .selectinload(Example.source),
        selectinload(Word.translations).selectinload(Translation.language_specific),
        selectinload(Word.translations)
        .selectinload(Translation.definitions)
        .selectinload(TranslationDefinition.examples)
        .selectinload(Example.source),
    ]


def count_words(session: Session) -> int:
    return session.scalar(select(func.count()).select_from(Word)) or 0


def list_words(session: Session, *, limit: int = 100, offset: int = 0) -> Sequence[Word]:
    """Return Words with their base word and translations, oldest first."""
    stmt = (
        select(Word)
        .options(*_summary_options())
        .order_by(Word.id)
        .offset(offset)
        .limit(limit)
    )
    return session.scalars(stmt).all()


def search_words(
    session: Session,
    query: str,
    language: Language | None = None,
    *,
    limit: int = 20,
) -> Sequence[Word]:
    """Find Words whose base word or any translation contains ``query``.

    Matching is a case-insensitive substring match. With ``language`` only
    base words / translations in that language are considered.
    """
    base_hits = select(BaseWord.word_pk).where(BaseWord.text.icontains(query, autoescape=True))
    translation_hits = select(Translation.word_pk).where(
        Translation.text.icontains(query, autoescape=True)
    )
    if language is not None:
        base_hits = base_hits.where(BaseWord.language == language.value)
        translation_hits = translation_hits.where(Translation.language == language.value)

    stmt = (
        select(Word)
        .where(or_(Word.id.in_(base_hits), Word.id.in_(translation_hits)))
        .options(*_summary_options())
        .order_by(Word.id)
        .limit(limit)
    )
    return session.scalars(stmt).all()


def get_word(session: Session, word_pk: int) -> Word | None:
    """Return the full entity tree of one Word, or None."""
    return session.get(Word, word_pk, options=_tree_options())


def get_word_by_external_id(session: Session, word_id: str) -> Word | None:
    stmt = select(Word).where(Word.word_id == word_id).options(*_tree_options())
    return session.scalars(stmt).first()


def get_translations(
    session: Session,
    word_pk: int,
    target_language: Language | None = None,
) -> list[Translation] | None:
    """Return a Word's translations, optionally for one language.

    Returns None when the Word itself does not exist, so callers can tell a
    missing word apart from a word without translations.
    """
    word = get_word(session, word_pk)
    if word is None:
        return None
    translations = list(word.translations)
    if target_language is not None:
        translations = [t for t in translations if t.language == target_language.value]
    return translations


__all__ = [
    "count_words",
    "list_words",
    "search_words",
    "get_word",
    "get_word_by_external_id",
    "get_translations",
]
