from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..absences.model import AbsenceRecord
from ..tardiness.model import TardinessRecord


@dataclass(frozen=True)
class AbsenceStat:
    teacher_id: str
    teacher_name: str
    total_absences: int


@dataclass(frozen=True)
class TardinessStat:
    teacher_id: str
    teacher_name: str
    total_tardiness: int
    total_minutes: int


@dataclass(frozen=True)
class TeacherSummary:
    """Read-model for the teacher details view."""

    teacher_id: str
    teacher_name: str
    national_id: str
    absences: list[AbsenceRecord]
    tardiness: list[TardinessRecord]
    total_absences: int
    total_tardiness: int
    total_late_minutes: int
    total_late_formatted: str
    first_absence: Optional[date]
    last_absence: Optional[date]
