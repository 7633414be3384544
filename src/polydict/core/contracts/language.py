"""Closed mapping tables for language codes and word types.

Raw source files carry free-form strings for both. They are resolved here
against explicit tables instead of being passed through to the store:

- :func:`parse_language` accepts only the codes listed in :class:`Language`
  (after trimming and lower-casing) and raises :class:`ValidationGap` otherwise.
- :func:`parse_word_type` maps unknown values to ``WordType.OTHER`` by
  default. Callers that want strict behavior pass ``fallback=None``.
"""

from __future__ import annotations

from enum import Enum

from polydict.core.errors import ValidationGap


class Language(str, Enum):
    """Languages the dictionary can store."""

    EN = "en"
    DE = "de"
    ES = "es"
    FR = "fr"
    IT = "it"
    PT = "pt"


class WordType(str, Enum):
    """Part of speech of a base word."""

    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    ARTICLE = "article"
    NUMERAL = "numeral"
    PHRASE = "phrase"
    OTHER = "other"


_LANGUAGES: dict[str, Language] = {member.value: member for member in Language}
_WORD_TYPES: dict[str, WordType] = {member.value: member for member in WordType}


def normalize_code(value: str) -> str:
    """Trim and lower-case a raw code."""
    return value.strip().lower()


def parse_language(value: str | None) -> Language:
    """Resolve a raw language code, e.g. ``" DE "`` -> ``Language.DE``."""
    if value is None or not value.strip():
        raise ValidationGap("missing language code")
    code = normalize_code(value)
    try:
        return _LANGUAGES[code]
    except KeyError:
        raise ValidationGap(f"unsupported language code {value!r}") from None


def parse_word_type(
    value: str | None,
    fallback: WordType | None = WordType.OTHER,
) -> WordType | None:
    """Resolve a raw word type.

    ``None`` stays ``None``. Unknown values become ``fallback``; with
    ``fallback=None`` they raise :class:`ValidationGap` instead.
    """
    if value is None:
        return None
    found = _WORD_TYPES.get(normalize_code(value))
    if found is not None:
        return found
    if fallback is None:
        raise ValidationGap(f"unsupported word type {value!r}")
    return fallback


__all__ = ["Language", "WordType", "normalize_code", "parse_language", "parse_word_type"]
