"""Name tables for the supported output locales ("ar" default, "en")."""

from __future__ import annotations

HIJRI_MONTHS = {
    "ar": (
        "محرم",
        "صفر",
        "ربيع الأول",
        "ربيع الثاني",
        "جمادى الأولى",
        "جمادى الآخرة",
        "رجب",
        "شعبان",
        "رمضان",
        "شوال",
        "ذو القعدة",
        "ذو الحجة",
    ),
    "en": (
        "Muharram",
        "Safar",
        "Rabi al-Awwal",
        "Rabi al-Thani",
        "Jumada al-Ula",
        "Jumada al-Akhirah",
        "Rajab",
        "Shaban",
        "Ramadan",
        "Shawwal",
        "Dhu al-Qadah",
        "Dhu al-Hijjah",
    ),
}

GREGORIAN_MONTHS = {
    "ar": (
        "يناير",
        "فبراير",
        "مارس",
        "أبريل",
        "مايو",
        "يونيو",
        "يوليو",
        "أغسطس",
        "سبتمبر",
        "أكتوبر",
        "نوفمبر",
        "ديسمبر",
    ),
    "en": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
}

# Sunday first
WEEKDAYS = {
    "ar": ("الأحد", "الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت"),
    "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
}

HIJRI_SUFFIX = {"ar": "هـ", "en": " AH"}

DURATION_FORMATS = {
    "ar": ("{hours} ساعة و {minutes} دقيقة", "{minutes} دقيقة"),
    "en": ("{hours} hour(s) and {minutes} minute(s)", "{minutes} minute(s)"),
}

TARDINESS_LINE = {
    "ar": "- {day_name} {hijri_date}: حضور الساعة {arrival_time} (تأخر {late_by} دقيقة)",
    "en": "- {day_name} {hijri_date}: arrival at {arrival_time} (late {late_by} minutes)",
}


STATISTICS_LABELS = {
    "ar": {
        "title": "إحصائيات الحضور",
        "heading": "إحصائيات الحضور والغياب",
        "school": "مدرسة",
        "principal": "مدير المدرسة",
        "absences": "إحصائيات الغياب",
        "tardiness": "إحصائيات التأخر",
        "teacher": "اسم المعلم",
        "absence_days": "عدد أيام الغياب",
        "tardiness_count": "عدد مرات التأخر",
        "late_minutes": "إجمالي دقائق التأخر",
        "no_absences": "لا يوجد سجلات غياب",
        "no_tardiness": "لا يوجد سجلات تأخر",
        "printed_on": "تاريخ الطباعة",
    },
    "en": {
        "title": "Attendance Statistics",
        "heading": "Attendance and Absence Statistics",
        "school": "School",
        "principal": "Principal",
        "absences": "Absence statistics",
        "tardiness": "Tardiness statistics",
        "teacher": "Teacher",
        "absence_days": "Days absent",
        "tardiness_count": "Late arrivals",
        "late_minutes": "Total minutes late",
        "no_absences": "No absence records",
        "no_tardiness": "No tardiness records",
        "printed_on": "Printed on",
    },
}


def table(tables: dict, locale: str):
    try:
        return tables[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r}") from None
