"""Migration pipeline: per-language source files -> dictionary store.

Flow
----
1. **Load**: read ``<lang>.json`` for every configured language
   (:mod:`polydict.pipelines.loader`). A bad file aborts the run.
2. **Group**: bucket the records by ``wordId`` and drop the ones that cannot
   be grouped (:mod:`polydict.pipelines.grouper`).
3. **Build**: for each group in turn, elect the base record and persist the
   entity graph (:mod:`polydict.pipelines.builder`).

Groups are processed one at a time; each is committed before the next
starts. Identifier conflicts skip the group. Any other store error propagates
as :class:`PersistenceError` and ends the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from sqlalchemy.orm import Session

from polydict.core.errors import IdentifierConflictError
from polydict.core.settings import get_logger

from .builder import persist_plan
from .grouper import elect_base, group_records
from .loader import load_sources
from .report import LoadReport

logger = get_logger("polydict.pipelines.migrate")


def run_migration(
    session: Session,
    source_dir: Path,
    languages: Sequence[str],
    base_language: str = "en",
) -> LoadReport:
    """Load, group and persist every word found under ``source_dir``.

    Parameters
    ----------
    session:
        Open store handle; see :func:`polydict.store.session.open_store`.
    source_dir:
        Directory containing one ``<lang>.json`` per entry of ``languages``.
    languages:
        Language files to read, in order. The order decides which record is
        the base when a group has none in ``base_language``.
    base_language:
        Preferred base language code.

    Returns
    -------
    LoadReport
        Totals for the run (processed, skipped, dropped, base collisions).
    """
    report = LoadReport(kind="migrate")

    records = load_sources(source_dir, languages)
    grouping = group_records(records)
    report.groups = len(grouping.groups)
    report.dropped = grouping.dropped

    for group in grouping.groups:
        plan = elect_base(group, base_language)
        report.base_collisions += len(plan.collisions)
        try:
            persist_plan(session, plan)
        except IdentifierConflictError:
            logger.warning("Word %s already exists; skipping group", group.word_id)
            report.skipped += 1
            report.skipped_ids.append(group.word_id)
            continue
        report.processed += 1

    logger.info(
        "Migration completed: %d processed, %d skipped, %d dropped, %d base collisions",
        report.processed,
        report.skipped,
        report.dropped,
        report.base_collisions,
    )
    return report


__all__ = ["run_migration"]
