from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..absences.repository import AbsenceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_valid_range
from ..core.constants import DEFAULT_LOCALE
from ..core.exceptions import NotFoundError, ValidationError
from ..dates.hijri import format_for_display
from ..dates.locale import STATISTICS_LABELS, table
from ..school.model import SchoolConfig, Teacher
from ..school.repository import ConfigRepository
from ..statistics.aggregator import aggregate_absences, aggregate_tardiness, filter_by_teacher_and_range
from ..tardiness.repository import TardinessRepository
from .document import DocumentRenderer, RenderedDocument
from .template_engine import build_tardiness_details, find_placeholders, render_template

logger = logging.getLogger(__name__)


class ReportService:
    """Builds accountability letters and the statistics sheet."""

    def __init__(
        self,
        absences: AbsenceRepository,
        tardiness: TardinessRepository,
        config: ConfigRepository,
        *,
        renderer: Optional[DocumentRenderer] = None,
        clock: Callable[[], datetime] = now_local,
        locale: str = DEFAULT_LOCALE,
    ):
        self._absences = absences
        self._tardiness = tardiness
        self._config = config
        self._renderer = renderer or DocumentRenderer(lang=locale)
        self._clock = clock
        self._locale = locale

    def _date_label(self, d: date) -> str:
        info = format_for_display(d, locale=self._locale)
        return f"{info.hijri} ({info.day_name})"

    def _base_values(self, config: SchoolConfig, teacher: Teacher) -> dict:
        return {
            "schoolName": config.school_name,
            "principalName": config.principal_name,
            "teacherName": teacher.name,
            "nationalId": teacher.national_id,
            "currentDate": format_for_display(self._clock().date(), locale=self._locale).hijri,
        }

    @staticmethod
    def _teacher(config: SchoolConfig, teacher_id: str) -> Teacher:
        teacher = config.find_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("المعلم غير موجود")
        return teacher

    @staticmethod
    def _period(records: list, start: Optional[date], end: Optional[date]) -> tuple[date, date]:
        """Resolve open bounds from the teacher's own records."""
        dates = sorted(r.date for r in records)
        if start is None:
            start = dates[0] if end is None else min(dates[0], end)
        if end is None:
            end = max(dates[-1], start)
        return start, end

    @staticmethod
    def _render(template: str, values: dict, kind: str) -> str:
        text = render_template(template, values)
        unresolved = find_placeholders(text)
        if unresolved:
            logger.warning("Unresolved placeholders in %s letter: %s", kind, ", ".join(unresolved))
        return text

    def absence_letter(
        self,
        teacher_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> RenderedDocument:
        """Absence letter for a period.

        A missing bound is taken from the teacher's first or last absence, so
        without dates the letter spans all of them.
        """
        config = self._config.get()
        teacher = self._teacher(config, teacher_id)
        if start is not None and end is not None:
            require_valid_range(start, end)

        records = [r for r in self._absences.list() if r.teacher_id == teacher.id]
        if records:
            start, end = self._period(records, start, end)
            records = filter_by_teacher_and_range(records, teacher.id, start, end)
        if not records:
            raise ValidationError("لا يوجد غياب مسجل لهذا المعلم في الفترة المحددة")

        values = self._base_values(config, teacher)
        values.update(
            startDate=self._date_label(start),
            endDate=self._date_label(end),
            totalDays=str(len(records)),
        )
        text = self._render(config.absence_template, values, "absence")
        logger.info("Absence letter: teacher=%s days=%d", teacher.id, len(records))
        return self._renderer.letter(title=f"مساءلة غياب - {teacher.name}", text=text)

    def tardiness_letter(
        self,
        teacher_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> RenderedDocument:
        config = self._config.get()
        teacher = self._teacher(config, teacher_id)
        if start is not None and end is not None:
            require_valid_range(start, end)

        records = [r for r in self._tardiness.list() if r.teacher_id == teacher.id]
        if records:
            start, end = self._period(records, start, end)
            records = filter_by_teacher_and_range(records, teacher.id, start, end)
        if not records:
            raise ValidationError("لا يوجد تأخر مسجل لهذا المعلم")

        records.sort(key=lambda r: (r.date, r.arrival_time))
        values = self._base_values(config, teacher)
        values["tardinessDetails"] = build_tardiness_details(records, locale=self._locale)
        values.update(startDate=self._date_label(records[0].date), endDate=self._date_label(records[-1].date))

        text = self._render(config.tardiness_template, values, "tardiness")
        logger.info("Tardiness letter: teacher=%s entries=%d", teacher.id, len(records))
        return self._renderer.letter(title=f"مساءلة تأخر - {teacher.name}", text=text)

    def statistics_report(self) -> RenderedDocument:
        config = self._config.get()
        return self._renderer.statistics(
            title=table(STATISTICS_LABELS, self._locale)["title"],
            school_name=config.school_name,
            principal_name=config.principal_name,
            absence_stats=aggregate_absences(self._absences.list()),
            tardiness_stats=aggregate_tardiness(self._tardiness.list()),
            printed_on=format_for_display(self._clock().date(), locale=self._locale).hijri,
        )
