"""Raw word records as they appear in the per-language source files.

Each file is a JSON array; each element is one language's rendering of one
lexical concept, e.g.::

    {
      "wordId": "w1",
      "language": "en",
      "text": "hello",
      "article": null,
      "definitions": [
        {"text": "greeting", "synonyms": [], "examples": ["Hello there"]}
      ]
    }

Field names are camelCase on the wire and snake_case in Python. Examples may
be plain strings or objects with an optional ``source`` citation; both are
normalized to :class:`RawExample`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ExampleCitation(CamelModel):
    """Where an example sentence was quoted from."""

    title: str | None = None
    publication: str | None = None
    date: datetime | None = None


class RawExample(CamelModel):
    text: str
    source: ExampleCitation | None = None


class RawDefinition(CamelModel):
    """One sense of a word with its synonyms and usage examples."""

    text: str
    synonyms: list[str] = Field(default_factory=list)
    examples: list[RawExample] = Field(default_factory=list)
    definition_id: str | None = None

    @field_validator("synonyms", mode="before")
    @classmethod
    def _null_synonyms(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("examples", mode="before")
    @classmethod
    def _coerce_examples(cls, v: Any) -> Any:
        """Accept ``"Hello there"`` as shorthand for ``{"text": "Hello there"}``."""
        if v is None:
            return []
        if isinstance(v, list):
            return [{"text": item} if isinstance(item, str) else item for item in v]
        return v


class RawMetadata(CamelModel):
    """Frequency and provenance facts about a word."""

    counter_words: int | None = None
    cumulative_frequency: float | None = None
    entry_date: datetime | None = None
    related_terms: list[str] = Field(default_factory=list)
    source: str | None = None

    @field_validator("related_terms", mode="before")
    @classmethod
    def _null_terms(cls, v: Any) -> Any:
        return [] if v is None else v


class LanguageSpecificNotes(CamelModel):
    usage_notes: str | None = None


class RawWordRecord(CamelModel):
    """One language's representation of one lexical concept.

    ``word_id`` is the external grouping key shared by every language's
    record of the same concept. It may be missing in dirty data; the grouper
    drops such records.
    """

    word_id: str | None = None
    language: str
    text: str
    article: str | None = None
    stem: str | None = None
    phonetics: str | None = None
    prefix: str | None = None
    word_type: str | None = None
    language_specific: LanguageSpecificNotes | None = None
    definitions: list[RawDefinition] = Field(default_factory=list)
    metadata: RawMetadata | None = None

    @field_validator("definitions", mode="before")
    @classmethod
    def _null_definitions(cls, v: Any) -> Any:
        return [] if v is None else v


__all__ = [
    "CamelModel",
    "ExampleCitation",
    "RawExample",
    "RawDefinition",
    "RawMetadata",
    "LanguageSpecificNotes",
    "RawWordRecord",
]
