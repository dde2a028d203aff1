from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_WEEKEND_DAYS
from .hijri import weekday_index


@dataclass(frozen=True)
class DateSelectionPolicy:
    """Which dates may be picked when recording an absence or tardiness.

    Weekend days use the Sunday=0 .. Saturday=6 numbering.
    """

    exclude_weekends: bool = True
    disable_future: bool = True
    weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS

    def is_weekend(self, d: date) -> bool:
        return weekday_index(d) in self.weekend_days

    def is_future(self, d: date, today: Optional[date] = None) -> bool:
        return d > (today or today_local())

    def is_disabled(self, d: date, today: Optional[date] = None) -> bool:
        if self.exclude_weekends and self.is_weekend(d):
            return True
        if self.disable_future and self.is_future(d, today):
            return True
        return False

    def nearest_valid_date(self, d: date, today: Optional[date] = None) -> date:
        today = today or today_local()
        if self.disable_future and d > today:
            d = today
        # all seven days as weekend would never terminate
        if self.exclude_weekends and len(set(self.weekend_days)) < 7:
            while self.is_weekend(d):
                d -= timedelta(days=1)
        return d
