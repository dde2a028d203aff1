from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import parse_iso_date, to_iso_date


@dataclass(frozen=True)
class TardinessRecord:
    """Domain entity: one late arrival.

    cutoff_time is the configured cutoff at creation time, so late_by_minutes
    stays consistent when the school later changes its cutoff.
    """

    id: str
    teacher_id: str
    teacher_name: str
    date: date
    hijri_date: str
    day_name: str
    arrival_time: str
    cutoff_time: str
    late_by_minutes: int
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "date": to_iso_date(self.date),
            "hijriDate": self.hijri_date,
            "dayName": self.day_name,
            "arrivalTime": self.arrival_time,
            "cutoffTime": self.cutoff_time,
            "lateByMinutes": self.late_by_minutes,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TardinessRecord":
        return cls(
            id=str(data["id"]),
            teacher_id=str(data["teacherId"]),
            teacher_name=data.get("teacherName", ""),
            date=parse_iso_date(str(data["date"])[:10]),
            hijri_date=data.get("hijriDate", ""),
            day_name=data.get("dayName", ""),
            arrival_time=data.get("arrivalTime", ""),
            cutoff_time=data.get("cutoffTime", ""),
            late_by_minutes=int(data.get("lateByMinutes", 0)),
            created_at=data.get("createdAt", ""),
        )
