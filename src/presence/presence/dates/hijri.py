"""Gregorian to Hijri conversion.

Uses the tabular (arithmetic) Islamic calendar, not the observational
Umm al-Qura calendar, so results can differ by one day near month
boundaries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from ..core.constants import DEFAULT_LOCALE
from .locale import GREGORIAN_MONTHS, HIJRI_MONTHS, HIJRI_SUFFIX, WEEKDAYS, table

HIJRI_EPOCH_JD = 1948439.5


@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int
    day: int
    month_name: str
    formatted: str


@dataclass(frozen=True)
class DateDisplay:
    gregorian: str
    hijri: str
    day_name: str


def gregorian_to_jd(year: int, month: int, day: int) -> float:
    """Julian Day (at midnight, hence the .5) of a proleptic Gregorian date."""
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + b - 1524.5


def jd_to_hijri(jd: float) -> tuple[int, int, int]:
    if jd < HIJRI_EPOCH_JD:
        raise ValueError("Date is before the Hijri epoch")

    k = math.floor(jd - HIJRI_EPOCH_JD) + 10632
    n = (k - 1) // 10631
    k = k - 10631 * n + 354
    j = ((10985 - k) // 5316) * ((50 * k) // 17719) + (k // 5670) * ((43 * k) // 15238)
    k = k - ((30 - j) // 15) * ((17719 * j) // 50) - (j // 16) * ((15238 * j) // 43) + 29
    month = (24 * k) // 709
    day = k - (709 * month) // 24
    year = 30 * n + j - 30
    return year, month, day


def to_hijri(d: date, *, locale: str = DEFAULT_LOCALE) -> HijriDate:
    year, month, day = jd_to_hijri(gregorian_to_jd(d.year, d.month, d.day))
    month_name = table(HIJRI_MONTHS, locale)[month - 1]
    return HijriDate(
        year=year,
        month=month,
        day=day,
        month_name=month_name,
        formatted=f"{day} {month_name} {year}{table(HIJRI_SUFFIX, locale)}",
    )


def weekday_index(d: date) -> int:
    """Sunday=0 .. Saturday=6."""
    return (d.weekday() + 1) % 7


def weekday_name(d: date, *, locale: str = DEFAULT_LOCALE) -> str:
    return table(WEEKDAYS, locale)[weekday_index(d)]


def format_gregorian(d: date, *, locale: str = DEFAULT_LOCALE) -> str:
    return f"{d.day} {table(GREGORIAN_MONTHS, locale)[d.month - 1]} {d.year}"


def format_for_display(d: date, *, locale: str = DEFAULT_LOCALE) -> DateDisplay:
    return DateDisplay(
        gregorian=format_gregorian(d, locale=locale),
        hijri=to_hijri(d, locale=locale).formatted,
        day_name=weekday_name(d, locale=locale),
    )
