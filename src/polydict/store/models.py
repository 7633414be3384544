"""SQLAlchemy ORM models for the dictionary entity graph.

Word is the aggregate root; every other row is reachable only through a Word
and is removed together with it (``cascade="all, delete-orphan"``)::

    Word ─┬─ BaseWord ── LanguageSpecific?
          ├─ Definition* ── Example* ── ExampleSource?
          ├─ Translation* ─┬─ LanguageSpecific?
          │                └─ TranslationDefinition* ── Example* ── ExampleSource?
          └─ WordMetadata?

``Word.word_id`` is the external identifier shared by all language renderings
of a concept. It carries the only uniqueness constraint the loaders rely on.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base shared by all dictionary tables."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class WordMetadata(Base):
    __tablename__ = "word_metadata"

    id: Mapped[int] = mapped_column(primary_key=True)
    counter_words: Mapped[int | None] = mapped_column(Integer)
    cumulative_frequency: Mapped[float | None] = mapped_column(Float)
    entry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    related_terms: Mapped[list[str]] = mapped_column(JSON, default=list)
    source: Mapped[str | None] = mapped_column(String(255))

    word: Mapped[Word | None] = relationship(back_populates="word_metadata")


class LanguageSpecific(Base):
    """Free-text usage notes for a base word or translation."""

    __tablename__ = "language_specific"

    id: Mapped[int] = mapped_column(primary_key=True)
    usage_notes: Mapped[str | None] = mapped_column(Text)


class Word(Base):
    __tablename__ = "words"

    id: Mapped[int] = mapped_column(primary_key=True)
    word_id: Mapped[str] = mapped_column(String(255), unique=True)
    metadata_id: Mapped[int | None] = mapped_column(
        ForeignKey("word_metadata.id"), unique=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    base_word: Mapped[BaseWord | None] = relationship(
        back_populates="word", uselist=False, cascade="all, delete-orphan"
    )
    definitions: Mapped[list[Definition]] = relationship(
        back_populates="word", cascade="all, delete-orphan", order_by="Definition.id"
    )
    translations: Mapped[list[Translation]] = relationship(
        back_populates="word", cascade="all, delete-orphan", order_by="Translation.id"
    )
    word_metadata: Mapped[WordMetadata | None] = relationship(
        back_populates="word", cascade="all, delete-orphan", single_parent=True
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Word(id={self.id!r}, word_id={self.word_id!r})"


class BaseWord(Base):
    """Canonical-language rendering of a Word (exactly one per Word)."""

    __tablename__ = "base_words"
    __table_args__ = (
        Index("idx_baseword_language", "language"),
        Index("idx_baseword_text", "text"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    word_pk: Mapped[int] = mapped_column(ForeignKey("words.id"), unique=True)
    text: Mapped[str] = mapped_column(String(255))
    language: Mapped[str] = mapped_column(String(8))
    article: Mapped[str | None] = mapped_column(String(32))
    stem: Mapped[str | None] = mapped_column(String(255))
    prefix: Mapped[str | None] = mapped_column(String(64))
    phonetics: Mapped[str | None] = mapped_column(String(255))
    word_type: Mapped[str | None] = mapped_column(String(32))
    language_specific_id: Mapped[int | None] = mapped_column(ForeignKey("language_specific.id"))

    word: Mapped[Word] = relationship(back_populates="base_word")
    language_specific: Mapped[LanguageSpecific | None] = relationship()


class Translation(Base):
    """Non-base-language rendering of a Word."""

    __tablename__ = "translations"
    __table_args__ = (
        Index("idx_translation_language", "language"),
        Index("idx_translation_text", "text"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    word_pk: Mapped[int] = mapped_column(ForeignKey("words.id"))
    text: Mapped[str] = mapped_column(String(255))
    language: Mapped[str] = mapped_column(String(8))
    article: Mapped[str | None] = mapped_column(String(32))
    stem: Mapped[str | None] = mapped_column(String(255))
    prefix: Mapped[str | None] = mapped_column(String(64))
    phonetics: Mapped[str | None] = mapped_column(String(255))
    language_specific_id: Mapped[int | None] = mapped_column(ForeignKey("language_specific.id"))

    word: Mapped[Word] = relationship(back_populates="translations")
    definitions: Mapped[list[TranslationDefinition]] = relationship(
        back_populates="translation",
        cascade="all, delete-orphan",
        order_by="TranslationDefinition.id",
    )
    language_specific: Mapped[LanguageSpecific | None] = relationship()


class Definition(Base):
    __tablename__ = "definitions"

    id: Mapped[int] = mapped_column(primary_key=True)
    word_pk: Mapped[int] = mapped_column(ForeignKey("words.id"))
    definition_id: Mapped[str | None] = mapped_column(String(255))
    text: Mapped[str] = mapped_column(Text)
    synonyms: Mapped[list[str]] = mapped_column(JSON, default=list)

    word: Mapped[Word] = relationship(back_populates="definitions")
    examples: Mapped[list[Example]] = relationship(
        back_populates="definition", cascade="all, delete-orphan", order_by="Example.id"
    )


class TranslationDefinition(Base):
    __tablename__ = "translation_definitions"

    id: Mapped[int] = mapped_column(primary_key=True)
    translation_id: Mapped[int] = mapped_column(ForeignKey("translations.id"))
    text: Mapped[str] = mapped_column(Text)
    synonyms: Mapped[list[str]] = mapped_column(JSON, default=list)

    translation: Mapped[Translation] = relationship(back_populates="definitions")
    examples: Mapped[list[Example]] = relationship(
        back_populates="translation_definition",
        cascade="all, delete-orphan",
        order_by="Example.id",
    )


class ExampleSource(Base):
    __tablename__ = "example_sources"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str | None] = mapped_column(String(255))
    publication: Mapped[str | None] = mapped_column(String(255))
    date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class Example(Base):
    """Usage example owned by exactly one Definition or TranslationDefinition."""

    __tablename__ = "examples"

    id: Mapped[int] = mapped_column(primary_key=True)
    text: Mapped[str] = mapped_column(Text)
    definition_id: Mapped[int | None] = mapped_column(ForeignKey("definitions.id"))
    translation_definition_id: Mapped[int | None] = mapped_column(
        ForeignKey("translation_definitions.id")
    )
    source_id: Mapped[int | None] = mapped_column(ForeignKey("example_sources.id"))

    definition: Mapped[Definition | None] = relationship(back_populates="examples")
    translation_definition: Mapped[TranslationDefinition | None] = relationship(
        back_populates="examples"
    )
    source: Mapped[ExampleSource | None] = relationship()


# Child-to-parent order; deleting in this order never orphans a foreign key.
DELETE_ORDER: tuple[type[Base], ...] = (
    Example,
    ExampleSource,
    TranslationDefinition,
    Definition,
    Translation,
    BaseWord,
    Word,
    WordMetadata,
    LanguageSpecific,
)


__all__ = [
    "Base",
    "Word",
    "BaseWord",
    "Translation",
    "Definition",
    "TranslationDefinition",
    "Example",
    "ExampleSource",
    "WordMetadata",
    "LanguageSpecific",
    "DELETE_ORDER",
]
