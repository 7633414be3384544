"""Response models for the HTTP API.

These are read-only views over the ORM rows (``from_attributes=True``). Keys
are camelCase on the wire to match the source files.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Out(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ExampleSourceOut(_Out):
    title: str | None = None
    publication: str | None = None
    date: datetime | None = None


class ExampleOut(_Out):
    id: int
    text: str
    source: ExampleSourceOut | None = None


class DefinitionOut(_Out):
    id: int
    text: str
    synonyms: list[str] = Field(default_factory=list)
    examples: list[ExampleOut] = Field(default_factory=list)


class LanguageSpecificOut(_Out):
    usage_notes: str | None = None


class BaseWordOut(_Out):
    id: int
    text: str
    language: str
    article: str | None = None
    stem: str | None = None
    prefix: str | None = None
    phonetics: str | None = None
    word_type: str | None = None
    language_specific: LanguageSpecificOut | None = None


class TranslationSummary(_Out):
    id: int
    text: str
    language: str


class TranslationOut(TranslationSummary):
    article: str | None = None
    stem: str | None = None
    prefix: str | None = None
    phonetics: str | None = None
    language_specific: LanguageSpecificOut | None = None
    definitions: list[DefinitionOut] = Field(default_factory=list)


class MetadataOut(_Out):
    counter_words: int | None = None
    cumulative_frequency: float | None = None
    entry_date: datetime | None = None
    related_terms: list[str] = Field(default_factory=list)
    source: str | None = None


class WordSummary(_Out):
    """One row of ``GET /words`` and ``GET /words/search``."""

    id: int
    word_id: str
    base_word: BaseWordOut | None = None
    translations: list[TranslationSummary] = Field(default_factory=list)


class WordDetail(_Out):
    """Full entity tree returned by ``GET /words/{id}``."""

    id: int
    word_id: str
    created_at: datetime | None = None
    base_word: BaseWordOut | None = None
    definitions: list[DefinitionOut] = Field(default_factory=list)
    translations: list[TranslationOut] = Field(default_factory=list)
    metadata: MetadataOut | None = Field(default=None, validation_alias="word_metadata")


class HealthOut(BaseModel):
    status: str
    message: str
    version: str
    environment: str
    timestamp: datetime


class ErrorOut(BaseModel):
    error: str


__all__ = [
    "ExampleOut",
    "DefinitionOut",
    "BaseWordOut",
    "TranslationSummary",
    "TranslationOut",
    "MetadataOut",
    "WordSummary",
    "WordDetail",
    "HealthOut",
    "ErrorOut",
]
