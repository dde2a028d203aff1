from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional, Sequence

from ..common.ids import generate_id
from ..common.validators import is_valid_national_id, require_national_id, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..tardiness.lateness import normalize_time
from .model import SchoolConfig, Teacher
from .repository import ConfigRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedRow:
    row_number: int
    name: str
    reason: str


@dataclass(frozen=True)
class ImportSummary:
    added: list[Teacher] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)


def _cell_text(value) -> str:
    # spreadsheet readers hand back numeric cells as int or float
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value if value is not None else "").strip()


def _clean_phone(phone) -> Optional[str]:
    return _cell_text(phone) or None


class SchoolService:
    """Use case: edit the school configuration and its teacher list."""

    def __init__(self, config: ConfigRepository, *, id_factory: Callable[[], str] = generate_id):
        self._config = config
        self._new_id = id_factory

    def get_config(self) -> SchoolConfig:
        return self._config.get()

    def save_config(self, config: SchoolConfig) -> SchoolConfig:
        config = replace(config, tardiness_cutoff_time=normalize_time(config.tardiness_cutoff_time))
        self._validate_teachers(config.teachers)
        self._config.save(config)
        logger.info("School config saved (%d teachers)", len(config.teachers))
        return config

    def update_settings(self, *, school_name: str, principal_name: str, tardiness_cutoff_time: str) -> SchoolConfig:
        config = replace(
            self.get_config(),
            school_name=(school_name or "").strip(),
            principal_name=(principal_name or "").strip(),
            tardiness_cutoff_time=(tardiness_cutoff_time or "").strip(),
        )
        return self.save_config(config)

    def update_templates(self, *, absence_template: str, tardiness_template: str) -> SchoolConfig:
        config = replace(
            self.get_config(),
            absence_template=absence_template or "",
            tardiness_template=tardiness_template or "",
        )
        return self.save_config(config)

    def find_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return self.get_config().find_teacher(teacher_id)

    def get_teacher(self, teacher_id: str) -> Teacher:
        teacher = self.find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")
        return teacher

    def list_teachers(self) -> list[Teacher]:
        return list(self.get_config().teachers)

    def add_teacher(self, *, name: str, national_id: str, phone: Optional[str] = None) -> Teacher:
        name = require_non_empty(name, "اسم المعلم")
        national_id = require_national_id(national_id)

        config = self.get_config()
        if any(t.national_id == national_id for t in config.teachers):
            raise ValidationError("رقم الهوية مسجل لمعلم آخر")

        teacher = Teacher(id=self._new_id(), name=name, national_id=national_id, phone=_clean_phone(phone))
        self._config.save(config.with_teachers([*config.teachers, teacher]))
        logger.info("Teacher added: %s", teacher.id)
        return teacher

    def update_teacher(
        self,
        teacher_id: str,
        *,
        name: str,
        national_id: str,
        phone: Optional[str] = None,
    ) -> Teacher:
        name = require_non_empty(name, "اسم المعلم")
        national_id = require_national_id(national_id)

        config = self.get_config()
        if not config.find_teacher(teacher_id):
            raise NotFoundError("المعلم غير موجود")
        if any(t.national_id == national_id and t.id != teacher_id for t in config.teachers):
            raise ValidationError("رقم الهوية مسجل لمعلم آخر")

        updated = Teacher(id=teacher_id, name=name, national_id=national_id, phone=_clean_phone(phone))
        self._config.save(config.with_teachers(updated if t.id == teacher_id else t for t in config.teachers))
        return updated

    def delete_teacher(self, teacher_id: str) -> Teacher:
        """Remove a teacher. Their absence/tardiness history is kept."""
        config = self.get_config()
        teacher = config.find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")

        self._config.save(config.with_teachers(t for t in config.teachers if t.id != teacher_id))
        logger.info("Teacher deleted: %s", teacher_id)
        return teacher

    def import_teachers(self, rows: Iterable[Sequence]) -> ImportSummary:
        """Bulk add (name, national_id, phone) rows, e.g. read from a spreadsheet.

        Invalid or duplicate rows are skipped; valid ones are saved in one write.
        """
        config = self.get_config()
        known_ids = {t.national_id for t in config.teachers}
        summary = ImportSummary()

        for row_number, row in enumerate(rows, start=1):
            cells = list(row) + [None] * 3
            name = _cell_text(cells[0])
            national_id = _cell_text(cells[1])

            if not name:
                summary.skipped.append(SkippedRow(row_number, name, "اسم المعلم مطلوب"))
                continue
            if not is_valid_national_id(national_id):
                summary.skipped.append(SkippedRow(row_number, name, "رقم الهوية غير صالح"))
                continue
            if national_id in known_ids:
                summary.skipped.append(SkippedRow(row_number, name, "رقم الهوية مسجل مسبقاً"))
                continue

            known_ids.add(national_id)
            summary.added.append(
                Teacher(id=self._new_id(), name=name, national_id=national_id, phone=_clean_phone(cells[2]))
            )

        if summary.added:
            self._config.save(config.with_teachers([*config.teachers, *summary.added]))
        logger.info("Teacher import: %d added, %d skipped", len(summary.added), len(summary.skipped))
        return summary

    @staticmethod
    def _validate_teachers(teachers: Sequence[Teacher]) -> None:
        seen: set[str] = set()
        for t in teachers:
            require_non_empty(t.name, "اسم المعلم")
            # stored values are checked as-is, not stripped
            if require_national_id(t.national_id) != t.national_id:
                raise ValidationError("رقم الهوية غير صالح")
            if t.national_id in seen:
                raise ValidationError(f"رقم الهوية {t.national_id} مكرر")
            seen.add(t.national_id)
