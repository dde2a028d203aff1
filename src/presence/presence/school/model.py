from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from ..core.constants import DEFAULT_CUTOFF_TIME
from .templates import DEFAULT_ABSENCE_TEMPLATE, DEFAULT_TARDINESS_TEMPLATE


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher listed in the school configuration."""

    id: str
    name: str
    national_id: str
    phone: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "name": self.name, "nationalId": self.national_id}
        if self.phone:
            data["phone"] = self.phone
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Teacher":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            national_id=str(data.get("nationalId", "")),
            phone=data.get("phone") or None,
        )


@dataclass(frozen=True)
class SchoolConfig:
    """Singleton configuration. Always saved as a whole."""

    school_name: str = ""
    principal_name: str = ""
    tardiness_cutoff_time: str = DEFAULT_CUTOFF_TIME
    teachers: tuple[Teacher, ...] = field(default_factory=tuple)
    absence_template: str = DEFAULT_ABSENCE_TEMPLATE
    tardiness_template: str = DEFAULT_TARDINESS_TEMPLATE

    def find_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return next((t for t in self.teachers if t.id == teacher_id), None)

    def with_teachers(self, teachers) -> "SchoolConfig":
        return replace(self, teachers=tuple(teachers))

    def to_dict(self) -> dict:
        return {
            "schoolName": self.school_name,
            "principalName": self.principal_name,
            "tardinessCutoffTime": self.tardiness_cutoff_time,
            "teachers": [t.to_dict() for t in self.teachers],
            "absenceTemplate": self.absence_template,
            "tardinessTemplate": self.tardiness_template,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SchoolConfig":
        default = cls()
        return cls(
            school_name=data.get("schoolName", default.school_name),
            principal_name=data.get("principalName", default.principal_name),
            tardiness_cutoff_time=data.get("tardinessCutoffTime", default.tardiness_cutoff_time),
            teachers=tuple(Teacher.from_dict(t) for t in data.get("teachers") or []),
            absence_template=data.get("absenceTemplate", default.absence_template),
            tardiness_template=data.get("tardinessTemplate", default.tardiness_template),
        )
