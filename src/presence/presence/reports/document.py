from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from jinja2 import Environment, PackageLoader, select_autoescape

from ..dates.locale import STATISTICS_LABELS, table
from ..statistics.model import AbsenceStat, TardinessStat
from .template_engine import to_html_lines


@dataclass(frozen=True)
class RenderedDocument:
    """Printable output: plain text (when the source is a letter) and HTML."""

    title: str
    text: str
    html: str


class DocumentRenderer:
    """Wraps template output in a print-ready (A4, RTL) HTML page."""

    def __init__(self, *, lang: str = "ar"):
        self._env = Environment(
            loader=PackageLoader("presence.reports", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._lang = lang

    def _page(self, template_name: str, *, title: str, **context) -> str:
        direction = "rtl" if self._lang == "ar" else "ltr"
        template = self._env.get_template(template_name)
        return template.render(title=title, lang=self._lang, direction=direction, **context)

    def letter(self, *, title: str, text: str) -> RenderedDocument:
        html = self._page("letter.html", title=title, content=to_html_lines(text))
        return RenderedDocument(title=title, text=text, html=html)

    def statistics(
        self,
        *,
        title: str,
        school_name: str,
        principal_name: str,
        absence_stats: Sequence[AbsenceStat],
        tardiness_stats: Sequence[TardinessStat],
        printed_on: str,
    ) -> RenderedDocument:
        labels = table(STATISTICS_LABELS, self._lang)
        html = self._page(
            "statistics.html",
            title=title,
            labels=labels,
            school_name=school_name,
            principal_name=principal_name,
            absence_stats=absence_stats,
            tardiness_stats=tardiness_stats,
            printed_on=printed_on,
        )
        lines = [labels["absences"]]
        lines += [f"{i}. {s.teacher_name}: {s.total_absences}" for i, s in enumerate(absence_stats, 1)]
        lines.append(labels["tardiness"])
        lines += [
            f"{i}. {s.teacher_name}: {s.total_tardiness} / {s.total_minutes}"
            for i, s in enumerate(tardiness_stats, 1)
        ]
        return RenderedDocument(title=title, text="\n".join(lines), html=html)
