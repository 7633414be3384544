"""Error kinds raised by the load pipelines.

Hierarchy
---------
- :class:`DictionaryError`: root; the CLI catches it and exits with code 1.
- :class:`SourceReadError`: a source file is missing or malformed. Fatal.
- :class:`IdentifierConflictError`: a Word with the same external identifier
  already exists. Recoverable: the group is skipped.
- :class:`ValidationGap`: a record lacks a grouping key or carries a value
  outside a closed mapping. The record is dropped and the load continues.
- :class:`PersistenceError`: any other store failure. Fatal.
"""

from __future__ import annotations

from pathlib import Path


class DictionaryError(Exception):
    """Base class for all polydict load errors."""


class SourceReadError(DictionaryError):
    """A source file could not be read or does not have the expected shape."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read source {self.path}: {reason}")


class IdentifierConflictError(DictionaryError):
    """A Word with this external identifier is already in the store."""

    def __init__(self, word_id: str) -> None:
        self.word_id = word_id
        super().__init__(f"Word {word_id!r} already exists")


class ValidationGap(DictionaryError, ValueError):
    """A record cannot be placed: missing key or unmapped enum value."""


class PersistenceError(DictionaryError):
    """The store rejected a write for a reason other than an identifier conflict."""


__all__ = [
    "DictionaryError",
    "SourceReadError",
    "IdentifierConflictError",
    "ValidationGap",
    "PersistenceError",
]
