"""Store cleaner: delete every dictionary row.

Deleting is opt-in. Without ``confirm=True`` the cleaner only counts what it
would delete and touches nothing. Back up the store before confirming.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from polydict.core.errors import PersistenceError
from polydict.core.settings import get_logger
from polydict.store.models import DELETE_ORDER

logger = get_logger("polydict.pipelines.clean")


@dataclass(slots=True)
class CleanResult:
    """Rows per table: deleted when ``dry_run`` is False, otherwise just counted."""

    dry_run: bool
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def clean_store(session: Session, confirm: bool = False) -> CleanResult:
    """Remove all dictionary rows, children before parents.

    Parameters
    ----------
    session:
        Open store handle.
    confirm:
        Must be True to delete anything; otherwise this is a dry run.
    """
    result = CleanResult(dry_run=not confirm)

    if not confirm:
        for model in DELETE_ORDER:
            table = model.__tablename__
            result.counts[table] = session.scalar(select(func.count()).select_from(model)) or 0
        logger.info("Dry run: no changes made (%d rows would be deleted)", result.total)
        return result

    try:
        for model in DELETE_ORDER:
            deleted = session.execute(delete(model))
            result.counts[model.__tablename__] = deleted.rowcount or 0
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"Cleanup failed: {exc}") from exc

    logger.info("Deleted %d rows", result.total)
    return result


__all__ = ["CleanResult", "clean_store"]
