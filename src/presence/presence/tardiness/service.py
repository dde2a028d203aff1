from __future__ import annotations

import logging
from dataclasses import dataclass
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
from ..statistics.aggregator import filter_by_teacher_and_range, sort_by_date
from .lateness import calculate_lateness, format_duration, is_late, normalize_time
from .model import TardinessRecord
from .repository import TardinessRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatenessPreview:
    arrival_time: str
    cutoff_time: str
    is_late: bool
    late_by_minutes: int
    formatted: str


class TardinessService:
    def __init__(
        self,
        tardiness: TardinessRepository,
        config: ConfigRepository,
        *,
        policy: Optional[DateSelectionPolicy] = None,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = generate_id,
        locale: str = DEFAULT_LOCALE,
    ):
        self._tardiness = tardiness
        self._config = config
        self._policy = policy
        self._clock = clock
        self._new_id = id_factory
        self._locale = locale

    def preview(self, arrival_time: str) -> LatenessPreview:
        """Lateness of an arrival against the current cutoff, before saving."""
        cutoff = self._config.get().tardiness_cutoff_time
        minutes = calculate_lateness(arrival_time, cutoff)
        return LatenessPreview(
            arrival_time=normalize_time(arrival_time),
            cutoff_time=cutoff,
            is_late=is_late(arrival_time, cutoff),
            late_by_minutes=minutes,
            formatted=format_duration(minutes, locale=self._locale),
        )

    def record_tardiness(self, teacher_id: str, on: date, arrival_time: str) -> TardinessRecord:
        teacher_id = require_non_empty(teacher_id, "المعلم")
        now = self._clock()
        if self._policy and self._policy.is_disabled(on, now.date()):
            raise ValidationError("لا يمكن التسجيل في هذا التاريخ")

        config = self._config.get()
        cutoff = config.tardiness_cutoff_time
        if not is_late(arrival_time, cutoff):
            raise ValidationError(f"وقت الحضور يجب أن يكون بعد {cutoff}")

        teacher = config.find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")

        record = TardinessRecord(
            id=self._new_id(),
            teacher_id=teacher.id,
            teacher_name=teacher.name,
            date=on,
            hijri_date=to_hijri(on, locale=self._locale).formatted,
            day_name=weekday_name(on, locale=self._locale),
            arrival_time=normalize_time(arrival_time),
            cutoff_time=cutoff,
            late_by_minutes=calculate_lateness(arrival_time, cutoff),
            created_at=now.isoformat(timespec="seconds"),
        )
        self._tardiness.append(record)
        logger.info("Tardiness recorded: teacher=%s date=%s late=%d", teacher.id, on, record.late_by_minutes)
        return record

    def list_tardiness(self) -> list[TardinessRecord]:
        """All records, newest date first."""
        return sort_by_date(self._tardiness.list(), newest_first=True)

    def list_for_teacher(self, teacher_id: str) -> list[TardinessRecord]:
        return [r for r in self.list_tardiness() if r.teacher_id == teacher_id]

    def list_for_teacher_in_range(self, teacher_id: str, start: date, end: date) -> list[TardinessRecord]:
        require_valid_range(start, end)
        records = filter_by_teacher_and_range(self._tardiness.list(), teacher_id, start, end)
        return sorted(records, key=lambda r: (r.date, r.arrival_time))

    def delete_tardiness(self, record_id: str) -> TardinessRecord:
        record = next((r for r in self._tardiness.list() if r.id == record_id), None)
        if not record or not self._tardiness.remove_by_id(record_id):
            raise NotFoundError("السجل غير موجود")
        logger.info("Tardiness deleted: %s", record_id)
        return record
