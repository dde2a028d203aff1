from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.ids import generate_id
from ..common.validators import require_non_empty, require_valid_range
from ..core.constants import DEFAULT_LOCALE
from ..core.exceptions import NotFoundError, ValidationError
from ..dates.date_policy import DateSelectionPolicy
from ..dates.hijri import to_hijri, weekday_name
from ..school.repository import ConfigRepository
from ..statistics.aggregator import exists_for_teacher_on_date, filter_by_teacher_and_range, sort_by_date
from .model import AbsenceRecord
from .repository import AbsenceRepository

logger = logging.getLogger(__name__)


class AbsenceService:
    def __init__(
        self,
        absences: AbsenceRepository,
        config: ConfigRepository,
        *,
        policy: Optional[DateSelectionPolicy] = None,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = generate_id,
        locale: str = DEFAULT_LOCALE,
    ):
        self._absences = absences
        self._config = config
        self._policy = policy
        self._clock = clock
        self._new_id = id_factory
        self._locale = locale

    def record_absence(self, teacher_id: str, on: date) -> AbsenceRecord:
        teacher_id = require_non_empty(teacher_id, "المعلم")
        now = self._clock()
        if self._policy and self._policy.is_disabled(on, now.date()):
            raise ValidationError("لا يمكن التسجيل في هذا التاريخ")

        # at most one absence per teacher and day
        if exists_for_teacher_on_date(self._absences.list(), teacher_id, on):
            raise ValidationError("تم تسجيل غياب هذا المعلم في هذا التاريخ مسبقاً")

        teacher = self._config.get().find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")

        record = AbsenceRecord(
            id=self._new_id(),
            teacher_id=teacher.id,
            teacher_name=teacher.name,
            date=on,
            hijri_date=to_hijri(on, locale=self._locale).formatted,
            day_name=weekday_name(on, locale=self._locale),
            created_at=now.isoformat(timespec="seconds"),
        )
        self._absences.append(record)
        logger.info("Absence recorded: teacher=%s date=%s", teacher.id, on)
        return record

    def list_absences(self) -> list[AbsenceRecord]:
        """All absences, newest date first."""
        return sort_by_date(self._absences.list(), newest_first=True)

    def list_for_teacher(self, teacher_id: str) -> list[AbsenceRecord]:
        return [r for r in self.list_absences() if r.teacher_id == teacher_id]

    def list_for_teacher_in_range(self, teacher_id: str, start: date, end: date) -> list[AbsenceRecord]:
        require_valid_range(start, end)
        return sort_by_date(filter_by_teacher_and_range(self._absences.list(), teacher_id, start, end))

    def delete_absence(self, record_id: str) -> AbsenceRecord:
        record = next((r for r in self._absences.list() if r.id == record_id), None)
        if not record or not self._absences.remove_by_id(record_id):
            raise NotFoundError("السجل غير موجود")
        logger.info("Absence deleted: %s", record_id)
        return record
