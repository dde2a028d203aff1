"""Cutoff-time lateness rule.

Times are naive "HH:mm" wall-clock strings compared within a single day.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_LOCALE
from ..core.exceptions import ValidationError
from ..dates.locale import DURATION_FORMATS, table

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> tuple[int, int]:
    m = _TIME_RE.match((value or "").strip())
    if not m:
        raise ValidationError("الوقت غير صالح (HH:MM)")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError("الوقت غير صالح (HH:MM)")
    return hours, minutes


def normalize_time(value: str) -> str:
    """Canonical zero-padded "HH:MM" with ASCII digits."""
    hours, minutes = parse_time(value)
    return f"{hours:02d}:{minutes:02d}"


def time_to_minutes(value: str) -> int:
    hours, minutes = parse_time(value)
    return hours * 60 + minutes


def calculate_lateness(arrival_time: str, cutoff_time: str) -> int:
    return max(0, time_to_minutes(arrival_time) - time_to_minutes(cutoff_time))


def is_late(arrival_time: str, cutoff_time: str) -> bool:
    # arriving exactly at the cutoff is on time
    return time_to_minutes(arrival_time) > time_to_minutes(cutoff_time)


def format_duration(total_minutes: int, *, locale: str = DEFAULT_LOCALE) -> str:
    if total_minutes < 0:
        raise ValueError(f"Negative duration: {total_minutes}")
    with_hours, minutes_only = table(DURATION_FORMATS, locale)
    hours, minutes = divmod(int(total_minutes), 60)
    if hours > 0:
        return with_hours.format(hours=hours, minutes=minutes)
    return minutes_only.format(minutes=minutes)


def current_time(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%H:%M")
