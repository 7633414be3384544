"""Search indexes on base-word and translation language/text.

The indexes are declared with their tables, so a freshly created schema
already has them. Stores created before they were declared (or restored from
a dump without them) are brought up to date with ``polydict create-indexes``.
"""

from __future__ import annotations

from sqlalchemy import Engine, Index

from polydict.core.settings import get_logger

from .models import BaseWord, Translation

logger = get_logger("polydict.store.indexes")

SEARCH_INDEXES: tuple[Index, ...] = tuple(
    sorted(
        (*BaseWord.__table__.indexes, *Translation.__table__.indexes),
        key=lambda index: str(index.name),
    )
)


def ensure_indexes(engine: Engine) -> list[str]:
    """Create any missing search index and return the names of all of them."""
    names: list[str] = []
    for index in SEARCH_INDEXES:
        index.create(bind=engine, checkfirst=True)
        logger.info("Ensured index %s", index.name)
        names.append(str(index.name))
    return names


__all__ = ["SEARCH_INDEXES", "ensure_indexes"]
