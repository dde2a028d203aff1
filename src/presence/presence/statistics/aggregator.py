"""Per-teacher grouping of absence and tardiness records.

Records may be entity objects (teacher_id, teacher_name, date,
late_by_minutes) or stored dicts (teacherId, teacherName, date,
lateByMinutes).

Ordering: totals descending; equal totals keep the order in which each
teacher first appears in the input.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Iterable, Sequence, TypeVar

from ..common.datetime_utils import parse_iso_date
from .model import AbsenceStat, TardinessStat

R = TypeVar("R")

_KEYS = {
    "teacher_id": "teacherId",
    "teacher_name": "teacherName",
    "date": "date",
    "late_by_minutes": "lateByMinutes",
}


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(_KEYS[name], default)
    return getattr(record, name, default)


def _record_date(record: Any) -> date:
    value = _field(record, "date")
    if isinstance(value, str):
        return parse_iso_date(value[:10])
    return value


def _group(records: Iterable[Any]) -> dict[str, list[Any]]:
    # dict keeps first-seen order, which is the tie-break
    groups: dict[str, list[Any]] = {}
    for r in records:
        groups.setdefault(str(_field(r, "teacher_id")), []).append(r)
    return groups


def aggregate_absences(records: Iterable[Any]) -> list[AbsenceStat]:
    stats = [
        AbsenceStat(
            teacher_id=teacher_id,
            teacher_name=_field(items[0], "teacher_name", ""),
            total_absences=len(items),
        )
        for teacher_id, items in _group(records).items()
    ]
    order = {s.teacher_id: i for i, s in enumerate(stats)}
    stats.sort(key=lambda s: (-s.total_absences, order[s.teacher_id]))
    return stats


def aggregate_tardiness(records: Iterable[Any]) -> list[TardinessStat]:
    stats = [
        TardinessStat(
            teacher_id=teacher_id,
            teacher_name=_field(items[0], "teacher_name", ""),
            total_tardiness=len(items),
            total_minutes=sum(int(_field(r, "late_by_minutes", 0)) for r in items),
        )
        for teacher_id, items in _group(records).items()
    ]
    order = {s.teacher_id: i for i, s in enumerate(stats)}
    stats.sort(key=lambda s: (-s.total_tardiness, order[s.teacher_id]))
    return stats


def filter_by_teacher_and_range(records: Iterable[R], teacher_id: str, start: date, end: date) -> list[R]:
    """Records of one teacher with start <= date <= end (calendar dates)."""
    return [
        r
        for r in records
        if str(_field(r, "teacher_id")) == teacher_id and start <= _record_date(r) <= end
    ]


def exists_for_teacher_on_date(records: Sequence[Any], teacher_id: str, on: date) -> bool:
    return any(str(_field(r, "teacher_id")) == teacher_id and _record_date(r) == on for r in records)


def sort_by_date(records: Iterable[R], *, newest_first: bool = False) -> list[R]:
    return sorted(records, key=_record_date, reverse=newest_first)
