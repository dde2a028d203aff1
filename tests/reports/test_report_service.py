from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from presence.absences.model import AbsenceRecord
from presence.absences.repository import store_absence_repository
from presence.core.exceptions import NotFoundError, ValidationError
from presence.reports.service import ReportService
from presence.school.model import SchoolConfig, Teacher
from presence.school.repository import StoreConfigRepository
from presence.storage.store import InMemoryStore
from presence.tardiness.model import TardinessRecord
from presence.tardiness.repository import store_tardiness_repository

NOW = datetime(2024, 3, 14, 9, 0, 0)


def _setup(**config):
    store = InMemoryStore()
    config_repo = StoreConfigRepository(store)
    config_repo.save(
        SchoolConfig(
            school_name="مدرسة النور",
            principal_name="أحمد",
            teachers=(
                Teacher(id="T1", name="خالد", national_id="1234567890"),
                Teacher(id="T2", name="سعد", national_id="2234567890"),
            ),
            **config,
        )
    )
    absences = store_absence_repository(store)
    tardiness = store_tardiness_repository(store)
    service = ReportService(absences, tardiness, config_repo, clock=lambda: NOW)
    return service, absences, tardiness


def _absence(rid, teacher_id, d):
    return AbsenceRecord(rid, teacher_id, "x", d, "", "", "")


def _late(rid, d, arrival, late):
    return TardinessRecord(rid, "T1", "خالد", d, f"hijri-{d.day}", "day", arrival, "07:00", late, "")


def test_absence_letter_for_period():
    service, absences, _ = _setup(
        absence_template="{{schoolName}}|{{teacherName}}|{{nationalId}}|{{startDate}}|{{endDate}}|{{totalDays}}|{{currentDate}}|{{principalName}}"
    )
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))
    absences.append(_absence("a2", "T1", date(2024, 3, 12)))
    absences.append(_absence("a3", "T1", date(2024, 2, 1)))
    absences.append(_absence("b1", "T2", date(2024, 3, 11)))

    doc = service.absence_letter("T1", date(2024, 3, 10), date(2024, 3, 12))

    assert doc.title == "مساءلة غياب - خالد"
    assert doc.text == (
        "مدرسة النور|خالد|1234567890|29 شعبان 1445هـ (الأحد)|2 رمضان 1445هـ (الثلاثاء)|2|4 رمضان 1445هـ|أحمد"
    )
    assert "<html" in doc.html
    assert 'dir="rtl"' in doc.html


def test_absence_letter_without_dates_spans_all_records():
    service, absences, _ = _setup(absence_template="{{startDate}}-{{endDate}}-{{totalDays}}")
    absences.append(_absence("a1", "T1", date(2024, 3, 12)))
    absences.append(_absence("a2", "T1", date(2024, 3, 10)))

    doc = service.absence_letter("T1")

    assert doc.text == "29 شعبان 1445هـ (الأحد)-2 رمضان 1445هـ (الثلاثاء)-2"


def test_absence_letter_default_template_fills_every_placeholder():
    service, absences, _ = _setup()
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))

    doc = service.absence_letter("T1")

    assert "{{" not in doc.text
    assert "مدرسة: مدرسة النور" in doc.text
    assert "(1) يوم/أيام" in doc.text


def test_absence_letter_errors():
    service, absences, _ = _setup()
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))

    with pytest.raises(ValidationError):
        service.absence_letter("T1", date(2024, 3, 11), date(2024, 3, 12))
    with pytest.raises(ValidationError):
        service.absence_letter("T2")
    with pytest.raises(ValidationError):
        service.absence_letter("T1", date(2024, 3, 12), date(2024, 3, 10))
    with pytest.raises(NotFoundError):
        service.absence_letter("nope")


def test_tardiness_letter_lists_records_chronologically():
    service, _, tardiness = _setup(tardiness_template="{{teacherName}}\n{{tardinessDetails}}\n{{unknown}}")
    tardiness.append(_late("l2", date(2024, 3, 11), "07:20", 20))
    tardiness.append(_late("l1", date(2024, 3, 10), "07:05", 5))

    doc = service.tardiness_letter("T1")

    assert doc.title == "مساءلة تأخر - خالد"
    assert doc.text.split("\n") == [
        "خالد",
        "- day hijri-10: حضور الساعة 07:05 (تأخر 5 دقيقة)",
        "- day hijri-11: حضور الساعة 07:20 (تأخر 20 دقيقة)",
        "{{unknown}}",
    ]
    assert "<br>" in doc.html


def test_tardiness_letter_with_range_and_empty_result():
    service, _, tardiness = _setup(tardiness_template="{{tardinessDetails}}")
    tardiness.append(_late("l1", date(2024, 3, 10), "07:05", 5))
    tardiness.append(_late("l2", date(2024, 3, 12), "07:15", 15))

    doc = service.tardiness_letter("T1", date(2024, 3, 11), date(2024, 3, 12))
    assert doc.text == "- day hijri-12: حضور الساعة 07:15 (تأخر 15 دقيقة)"

    with pytest.raises(ValidationError):
        service.tardiness_letter("T2")


def test_letter_html_escapes_template_text():
    service, absences, _ = _setup(absence_template="<script>{{teacherName}}</script>")
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))

    doc = service.absence_letter("T1")

    assert "<script>" not in doc.html
    assert "&lt;script&gt;خالد&lt;/script&gt;" in doc.html


def test_statistics_report():
    service, absences, tardiness = _setup()
    absences.append(AbsenceRecord("a1", "T2", "سعد", date(2024, 3, 10), "", "", ""))
    absences.append(AbsenceRecord("a2", "T2", "سعد", date(2024, 3, 11), "", "", ""))
    absences.append(AbsenceRecord("a3", "T1", "خالد", date(2024, 3, 11), "", "", ""))
    tardiness.append(_late("l1", date(2024, 3, 10), "07:05", 5))

    doc = service.statistics_report()

    assert doc.title == "إحصائيات الحضور"
    assert doc.text.split("\n") == [
        "إحصائيات الغياب",
        "1. سعد: 2",
        "2. خالد: 1",
        "إحصائيات التأخر",
        "1. خالد: 1 / 5",
    ]
    assert "مدرسة النور" in doc.html
    assert "4 رمضان 1445هـ" in doc.html
    assert doc.html.index("سعد") < doc.html.index("<td>خالد</td>")


def test_statistics_report_when_empty():
    service, _, _ = _setup()
    doc = service.statistics_report()
    assert "لا يوجد سجلات غياب" in doc.html
    assert "لا يوجد سجلات تأخر" in doc.html


def test_absence_letter_start_only_counts_from_start():
    service, absences, _ = _setup(absence_template="{{startDate}}|{{endDate}}|{{totalDays}}")
    absences.append(_absence("a1", "T1", date(2024, 1, 1)))
    absences.append(_absence("a2", "T1", date(2024, 3, 10)))

    doc = service.absence_letter("T1", start=date(2024, 3, 1))

    assert doc.text == "20 شعبان 1445هـ (الجمعة)|29 شعبان 1445هـ (الأحد)|1"


def test_absence_letter_end_only_counts_up_to_end():
    service, absences, _ = _setup(absence_template="{{startDate}}|{{totalDays}}")
    absences.append(_absence("a1", "T1", date(2024, 1, 1)))
    absences.append(_absence("a2", "T1", date(2024, 3, 10)))

    doc = service.absence_letter("T1", end=date(2024, 2, 1))

    assert doc.text == "19 جمادى الآخرة 1445هـ (الإثنين)|1"


def test_absence_letter_open_bound_past_all_records():
    service, absences, _ = _setup()
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))

    with pytest.raises(ValidationError):
        service.absence_letter("T1", start=date(2024, 3, 12))
    with pytest.raises(ValidationError):
        service.absence_letter("T1", end=date(2024, 3, 5))


def test_tardiness_letter_start_only():
    service, _, tardiness = _setup(tardiness_template="{{tardinessDetails}}")
    tardiness.append(_late("l1", date(2024, 3, 10), "07:05", 5))
    tardiness.append(_late("l2", date(2024, 3, 12), "07:15", 15))

    doc = service.tardiness_letter("T1", start=date(2024, 3, 11))

    assert doc.text == "- day hijri-12: حضور الساعة 07:15 (تأخر 15 دقيقة)"


def test_unresolved_placeholders_are_logged(caplog):
    service, absences, _ = _setup(absence_template="{{teacherName}} {{unknown}}")
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))
    caplog.set_level(logging.WARNING, logger="presence.reports.service")

    doc = service.absence_letter("T1")

    assert doc.text == "خالد {{unknown}}"
    assert "unknown" in caplog.text


def test_default_templates_leave_nothing_unresolved(caplog):
    service, absences, tardiness = _setup()
    absences.append(_absence("a1", "T1", date(2024, 3, 10)))
    tardiness.append(_late("l1", date(2024, 3, 10), "07:05", 5))
    caplog.set_level(logging.WARNING, logger="presence.reports.service")

    service.absence_letter("T1")
    service.tardiness_letter("T1")

    assert [r for r in caplog.records if r.name == "presence.reports.service"] == []


def test_statistics_report_in_english():
    store = InMemoryStore()
    config_repo = StoreConfigRepository(store)
    service = ReportService(
        store_absence_repository(store),
        store_tardiness_repository(store),
        config_repo,
        clock=lambda: NOW,
        locale="en",
    )

    doc = service.statistics_report()

    assert doc.title == "Attendance Statistics"
    assert doc.text.split("\n") == ["Absence statistics", "Tardiness statistics"]
    assert 'dir="ltr"' in doc.html
    assert "Days absent" in doc.html
    assert "No tardiness records" in doc.html
    assert "4 Ramadan 1445 AH" in doc.html
    assert "الغياب" not in doc.html
