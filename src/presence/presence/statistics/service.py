from __future__ import annotations

from ..absences.repository import AbsenceRepository
from ..core.constants import DEFAULT_LOCALE
from ..core.exceptions import NotFoundError
from ..school.repository import ConfigRepository
from ..tardiness.lateness import format_duration
from ..tardiness.repository import TardinessRepository
from .aggregator import aggregate_absences, aggregate_tardiness, sort_by_date
from .model import AbsenceStat, TardinessStat, TeacherSummary


class StatisticsService:
    def __init__(
        self,
        absences: AbsenceRepository,
        tardiness: TardinessRepository,
        config: ConfigRepository,
        *,
        locale: str = DEFAULT_LOCALE,
    ):
        self._absences = absences
        self._tardiness = tardiness
        self._config = config
        self._locale = locale

    def absence_stats(self) -> list[AbsenceStat]:
        return aggregate_absences(self._absences.list())

    def tardiness_stats(self) -> list[TardinessStat]:
        return aggregate_tardiness(self._tardiness.list())

    def teacher_summary(self, teacher_id: str) -> TeacherSummary:
        teacher = self._config.get().find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")

        absences = sort_by_date((r for r in self._absences.list() if r.teacher_id == teacher_id), newest_first=True)
        tardiness = sort_by_date((r for r in self._tardiness.list() if r.teacher_id == teacher_id), newest_first=True)
        late_minutes = sum(r.late_by_minutes for r in tardiness)

        return TeacherSummary(
            teacher_id=teacher.id,
            teacher_name=teacher.name,
            national_id=teacher.national_id,
            absences=absences,
            tardiness=tardiness,
            total_absences=len(absences),
            total_tardiness=len(tardiness),
            total_late_minutes=late_minutes,
            total_late_formatted=format_duration(late_minutes, locale=self._locale),
            first_absence=absences[-1].date if absences else None,
            last_absence=absences[0].date if absences else None,
        )
