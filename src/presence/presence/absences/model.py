from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import parse_iso_date, to_iso_date


@dataclass(frozen=True)
class AbsenceRecord:
    """Domain entity: one absence day of a teacher.

    teacher_name, hijri_date and day_name are snapshots taken when the record
    was created; they are never refreshed from the current configuration.
    """

    id: str
    teacher_id: str
    teacher_name: str
    date: date
    hijri_date: str
    day_name: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "date": to_iso_date(self.date),
            "hijriDate": self.hijri_date,
            "dayName": self.day_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AbsenceRecord":
        return cls(
            id=str(data["id"]),
            teacher_id=str(data["teacherId"]),
            teacher_name=data.get("teacherName", ""),
            date=parse_iso_date(str(data["date"])[:10]),
            hijri_date=data.get("hijriDate", ""),
            day_name=data.get("dayName", ""),
            created_at=data.get("createdAt", ""),
        )
