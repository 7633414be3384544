"""Source loader: per-language JSON files -> flat list of raw word records.

Each supported language has one file, ``<source_dir>/<lang>.json``, holding a
JSON array of :class:`RawWordRecord` objects. Any file that is missing, is not
valid JSON, is not an array, or has an element of the wrong shape aborts the
whole load with :class:`SourceReadError`; there is no partial-language load.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from polydict.core.contracts.records import RawWordRecord
from polydict.core.errors import SourceReadError
from polydict.core.settings import get_logger

logger = get_logger("polydict.pipelines.loader")

_RECORDS = TypeAdapter(list[RawWordRecord])


def read_json(path: Path) -> Any:
    """Read and decode one JSON file, mapping every failure to SourceReadError."""
    if not path.is_file():
        raise SourceReadError(path, "file does not exist")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise SourceReadError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, str(exc)) from exc


def load_source_file(path: Path) -> list[RawWordRecord]:
    """Load one language file."""
    data = read_json(path)
    if not isinstance(data, list):
        raise SourceReadError(path, f"expected a JSON array, got {type(data).__name__}")
    try:
        records = _RECORDS.validate_python(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise SourceReadError(path, f"element {where}: {first['msg']}") from exc
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def load_sources(source_dir: Path, languages: Iterable[str]) -> list[RawWordRecord]:
    """Load every ``<lang>.json`` under ``source_dir``, in the order given.

    The result is flat: all records of the first language, then the second,
    and so on. This order is what the grouper preserves within each group.
    """
    records: list[RawWordRecord] = []
    for code in languages:
        records.extend(load_source_file(source_dir / f"{code}.json"))
    return records


__all__ = ["read_json", "load_source_file", "load_sources"]
