"""{{placeholder}} substitution for the letter templates."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from markupsafe import Markup, escape

from ..core.constants import DEFAULT_LOCALE
from ..dates.locale import TARDINESS_LINE, table

PLACEHOLDERS = (
    "schoolName",
    "principalName",
    "teacherName",
    "startDate",
    "endDate",
    "totalDays",
    "currentDate",
    "tardinessDetails",
    "nationalId",
)

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, values: Mapping[str, Any]) -> str:
    """Replace every occurrence of each known placeholder that has a value.

    Unknown placeholders and known ones missing from values stay verbatim.
    """

    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if name in PLACEHOLDERS and values.get(name) is not None:
            return str(values[name])
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


def find_placeholders(template: str) -> list[str]:
    seen: list[str] = []
    for name in _PLACEHOLDER_RE.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def build_tardiness_details(records: Iterable[Any], *, locale: str = DEFAULT_LOCALE) -> str:
    """One line per record, in the order given."""
    line = table(TARDINESS_LINE, locale)
    return "\n".join(
        line.format(
            day_name=r.day_name,
            hijri_date=r.hijri_date,
            arrival_time=r.arrival_time,
            late_by=r.late_by_minutes,
        )
        for r in records
    )


def to_html_lines(text: str) -> Markup:
    """Escape the text and turn newlines into <br>."""
    return Markup("<br>").join(escape(line) for line in text.split("\n"))
