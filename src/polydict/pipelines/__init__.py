"""Load pipelines for polydict.

Currently exposed:

- :func:`run_migration`: per-language files -> grouper -> builder.
- :func:`run_seed`: consolidated seed document -> builder.
- :func:`clean_store`: delete every dictionary row (dry run by default).
"""

from __future__ import annotations

from .clean import CleanResult, clean_store
from .migrate import run_migration
from .report import LoadReport
from .seed import run_seed

__all__ = ["run_migration", "run_seed", "clean_store", "CleanResult", "LoadReport"]
