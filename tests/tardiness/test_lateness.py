from __future__ import annotations

from datetime import datetime

import pytest

from presence.core.exceptions import ValidationError
from presence.tardiness.lateness import (
    calculate_lateness,
    current_time,
    format_duration,
    is_late,
    normalize_time,
    parse_time,
    time_to_minutes,
)


@pytest.mark.parametrize(
    "arrival, cutoff, expected",
    [
        ("07:20", "07:00", 20),
        ("06:50", "07:00", 0),
        ("07:00", "07:00", 0),
        ("08:05", "07:00", 65),
        ("7:45", "07:30", 15),
    ],
)
def test_calculate_lateness(arrival, cutoff, expected):
    assert calculate_lateness(arrival, cutoff) == expected


def test_is_late_is_strict():
    assert is_late("07:01", "07:00")
    assert not is_late("07:00", "07:00")
    assert not is_late("06:59", "07:00")


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("23:59") == 1439


@pytest.mark.parametrize("value", ["", "7", "7:5", "24:00", "07:60", "ab:cd", "07:00:00"])
def test_malformed_time_is_rejected(value):
    with pytest.raises(ValidationError):
        parse_time(value)


def test_format_duration_arabic():
    assert format_duration(0) == "0 دقيقة"
    assert format_duration(45) == "45 دقيقة"
    assert format_duration(125) == "2 ساعة و 5 دقيقة"


def test_format_duration_english():
    assert format_duration(0, locale="en") == "0 minute(s)"
    assert format_duration(60, locale="en") == "1 hour(s) and 0 minute(s)"
    assert format_duration(59, locale="en") == "59 minute(s)"
    assert format_duration(125, locale="en") == "2 hour(s) and 5 minute(s)"


def test_current_time():
    assert current_time(datetime(2024, 3, 10, 7, 5)) == "07:05"


def test_normalize_time():
    assert normalize_time("7:05") == "07:05"
    assert normalize_time(" 07:20 ") == "07:20"
    assert normalize_time("٠٧:٢٠") == "07:20"


def test_negative_duration_is_rejected():
    with pytest.raises(ValueError):
        format_duration(-5, locale="en")
