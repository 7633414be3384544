"""Run summary shared by the migration and seed pipelines."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class LoadReport:
    """Counters for one load run.

    Attributes
    ----------
    kind : str
        ``"migrate"`` or ``"seed"``.
    groups : int
        Word groups (or seed words) considered after dropping invalid records.
    processed : int
        Groups written to the store.
    skipped : int
        Groups skipped because their identifier already existed.
    dropped : int
        Records dropped before grouping (missing identifier, unmapped language).
    base_collisions : int
        Extra records in the base language that were neither base nor translation.
    skipped_ids : list[str]
        Identifiers of the skipped groups, in processing order.
    """

    kind: str
    groups: int = 0
    processed: int = 0
    skipped: int = 0
    dropped: int = 0
    base_collisions: int = 0
    skipped_ids: list[str] = field(default_factory=list)
    started_at: str = field(
        default_factory=lambda: datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def write(self, path: Path) -> Path:
        """Write the report as JSON to ``path`` (parent directories are created)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.as_dict(), f, ensure_ascii=False, indent=2)
            f.write("\n")
        return path


__all__ = ["LoadReport"]
