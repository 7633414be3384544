"""Persistence layer: ORM models, session lifecycle, indexes and read queries."""

from __future__ import annotations

from .indexes import SEARCH_INDEXES, ensure_indexes
from .models import (
    Base,
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
from .session import create_store_engine, open_store, session_factory

__all__ = [
    "Base",
    "BaseWord",
    "Definition",
    "Example",
    "ExampleSource",
    "LanguageSpecific",
    "Translation",
    "TranslationDefinition",
    "Word",
    "WordMetadata",
    "SEARCH_INDEXES",
    "ensure_indexes",
    "create_store_engine",
    "open_store",
    "session_factory",
]
