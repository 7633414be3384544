"""Grouper: partition raw records by external word identifier.

Two steps:

1. :func:`group_records` buckets records into :class:`WordGroup` values in
   first-appearance order. Records without an identifier, or with a language
   outside the closed :class:`Language` table, are dropped and counted.
2. :func:`elect_base` picks the base record of one group and turns the rest
   into translation candidates, producing a :class:`WordPlan` for the builder.

Base election
-------------
The base is the record whose language equals ``base_language`` (default
``"en"``) regardless of its position; without one, the first record of the
group. Other records in the base's language are not translations. They are
dropped and reported as ``collisions`` on the plan.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from polydict.core.contracts.language import normalize_code, parse_language
from polydict.core.contracts.records import RawWordRecord
from polydict.core.errors import ValidationGap
from polydict.core.settings import get_logger

logger = get_logger("polydict.pipelines.grouper")


@dataclass(frozen=True, slots=True)
class WordGroup:
    """All records sharing one external identifier, in input order."""

    word_id: str
    records: tuple[RawWordRecord, ...]

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError(f"WordGroup {self.word_id!r} must not be empty")

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(normalize_code(r.language) for r in self.records)


@dataclass(frozen=True, slots=True)
class WordPlan:
    """A group after base election, ready to be persisted."""

    word_id: str
    base: RawWordRecord
    translations: tuple[RawWordRecord, ...] = ()
    collisions: tuple[RawWordRecord, ...] = ()


@dataclass(slots=True)
class GroupingResult:
    groups: list[WordGroup] = field(default_factory=list)
    dropped: int = 0


def check_record(record: RawWordRecord) -> str:
    """Return the record's identifier, or raise ValidationGap if it cannot be grouped."""
    if record.word_id is None or not record.word_id.strip():
        raise ValidationGap(f"missing wordId for {record.text!r}")
    parse_language(record.language)
    return record.word_id


def group_records(records: Iterable[RawWordRecord]) -> GroupingResult:
    """Bucket ``records`` by identifier, dropping the ones that fail :func:`check_record`."""
    buckets: dict[str, list[RawWordRecord]] = {}
    dropped = 0
    for record in records:
        try:
            word_id = check_record(record)
        except ValidationGap as exc:
            dropped += 1
            logger.warning("Skipping record: %s", exc)
            continue
        buckets.setdefault(word_id, []).append(record)

    groups = [WordGroup(word_id, tuple(items)) for word_id, items in buckets.items()]
    logger.info("Found %d word groups (%d records dropped)", len(groups), dropped)
    return GroupingResult(groups=groups, dropped=dropped)


def elect_base(group: WordGroup, base_language: str = "en") -> WordPlan:
    """Choose the base record of ``group`` and split off its translations."""
    wanted = normalize_code(base_language)
    languages = group.languages
    base_index = languages.index(wanted) if wanted in languages else 0
    base = group.records[base_index]
    base_code = languages[base_index]

    translations: list[RawWordRecord] = []
    collisions: list[RawWordRecord] = []
    for index, record in enumerate(group.records):
        if index == base_index:
            continue
        if languages[index] == base_code:
            collisions.append(record)
        else:
            translations.append(record)

    if collisions:
        logger.warning(
            "Group %s has %d extra %r record(s); keeping %r as base",
            group.word_id,
            len(collisions),
            base_code,
            base.text,
        )
    return WordPlan(
        word_id=group.word_id,
        base=base,
        translations=tuple(translations),
        collisions=tuple(collisions),
    )


__all__ = [
    "WordGroup",
    "WordPlan",
    "GroupingResult",
    "check_record",
    "group_records",
    "elect_base",
]
