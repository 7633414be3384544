"""Consolidated seed document: fully nested words in one JSON file.

Unlike the per-language source files, each seed word already carries its base
word, definitions, translations and metadata, so no grouping step is needed::

    {"words": [{"baseWord": {...}, "definitions": [...],
                "translations": [...], "metadata": {...}}]}
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .records import CamelModel, LanguageSpecificNotes, RawDefinition, RawMetadata


class SeedEntry(CamelModel):
    """Surface form of a word in one language."""

    text: str
    language: str
    article: str | None = None
    stem: str | None = None
    prefix: str | None = None
    phonetics: str | None = None
    word_type: str | None = None
    language_specific: LanguageSpecificNotes | None = None


class SeedTranslation(SeedEntry):
    definitions: list[RawDefinition] = Field(default_factory=list)

    @field_validator("definitions", mode="before")
    @classmethod
    def _null_definitions(cls, v: Any) -> Any:
        return [] if v is None else v


class SeedWord(CamelModel):
    """A complete word: base entry, its senses, translations and metadata."""

    word_id: str | None = None
    base_word: SeedEntry
    definitions: list[RawDefinition] = Field(default_factory=list)
    translations: list[SeedTranslation] = Field(default_factory=list)
    metadata: RawMetadata | None = None

    @field_validator("definitions", "translations", mode="before")
    @classmethod
    def _null_lists(cls, v: Any) -> Any:
        return [] if v is None else v


class SeedDocument(CamelModel):
    words: list[SeedWord] = Field(default_factory=list)


__all__ = ["SeedEntry", "SeedTranslation", "SeedWord", "SeedDocument"]
