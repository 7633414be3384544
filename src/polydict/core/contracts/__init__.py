"""Wire contracts for source files and the closed enum tables."""

from __future__ import annotations

from .language import Language, WordType, parse_language, parse_word_type
from .records import (
    ExampleCitation,
    LanguageSpecificNotes,
    RawDefinition,
    RawExample,
    RawMetadata,
    RawWordRecord,
)
from .seed import SeedDocument, SeedEntry, SeedTranslation, SeedWord

__all__ = [
    "Language",
    "WordType",
    "parse_language",
    "parse_word_type",
    "ExampleCitation",
    "LanguageSpecificNotes",
    "RawDefinition",
    "RawExample",
    "RawMetadata",
    "RawWordRecord",
    "SeedDocument",
    "SeedEntry",
    "SeedTranslation",
    "SeedWord",
]
