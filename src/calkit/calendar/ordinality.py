from __future__ import annotations

import math
from typing import Optional

from .converter import NANOSECONDS_PER_SECOND, FieldConverter, LocalDate
from .units import CalendarUnit

U = CalendarUnit

# How many of each time-of-day unit fit in one local day.
_PER_DAY = {
    U.HOUR: 24,
    U.MINUTE: 24 * 60,
    U.SECOND: 24 * 3600,
    U.NANOSECOND: 24 * 3600 * NANOSECONDS_PER_SECOND,
}

_WEEK_UNITS = frozenset({U.WEEK_OF_MONTH, U.WEEK_OF_YEAR})


class OrdinalityEngine:
    """
    One-based position of a smaller unit inside the larger unit containing
    an instant, e.g. the day of the year or the hour of the month.

    Positions are counted on the local wall clock, so on a day that skips
    02:00 the 03:00 hour is the fourth hour, and both 01:00 hours of a day
    that repeats it are the second.  Unit pairs that do not nest, and era 0
    for everything but the year, give None.
    """

    def __init__(self, converter: FieldConverter) -> None:
        self._cv = converter

    def ordinality(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[int]:
        if not small.is_within(large):
            return None

        local = self._cv.local_date(at)

        if large is U.ERA and local.year < 1:
            return 1 - local.year if small is U.YEAR else None

        if small.is_time_of_day:
            return self._time_ordinality(small, large, local)
        return self._date_ordinality(small, large, local)

    # ── date units ───────────────────────────────────────────────────────

    def _date_ordinality(self, small: CalendarUnit, large: CalendarUnit, local: LocalDate) -> Optional[int]:
        if small is U.YEAR:
            return local.year
        if small is U.YEAR_FOR_WEEK_OF_YEAR:
            year_woy = self._cv.week_of_year(local)[1]
            # Early days of year 1 can fall in week-year 0, outside the era.
            return year_woy if year_woy >= 1 else None

        quarter = (local.month - 1) // 3 + 1
        if small is U.QUARTER:
            return quarter if large is U.YEAR else (local.year - 1) * 4 + quarter
        if small is U.MONTH:
            if large is U.QUARTER:
                return (local.month - 1) % 3 + 1
            if large is U.YEAR:
                return local.month
            return (local.year - 1) * 12 + local.month

        if large in _WEEK_UNITS:
            # day or weekday within its week
            return self._cv.relative_weekday(local.weekday) + 1

        day_in_period = local.days - self._cv.period_start_day(large, local) + 1
        if small is U.DAY:
            return day_in_period
        if small is U.WEEKDAY or small is U.WEEKDAY_ORDINAL:
            return (day_in_period - 1) // 7 + 1
        # week_of_month or week_of_year
        return max(1, self._cv.week_in_period(day_in_period, local.weekday))

    # ── time-of-day units ────────────────────────────────────────────────

    def _time_ordinality(self, small: CalendarUnit, large: CalendarUnit, local: LocalDate) -> int:
        whole = math.floor(local.seconds)
        if small is U.HOUR:
            index = whole // 3600
        elif small is U.MINUTE:
            index = whole // 60
        elif small is U.SECOND:
            index = whole
        else:
            nanos = min(
                int(round((local.seconds - whole) * NANOSECONDS_PER_SECOND)),
                NANOSECONDS_PER_SECOND - 1,
            )
            index = whole * NANOSECONDS_PER_SECOND + nanos

        if large.is_time_of_day:
            return index % (_PER_DAY[small] // _PER_DAY[large]) + 1

        days_before = local.days - self._cv.period_start_day(large, local)
        return days_before * _PER_DAY[small] + index + 1

    def __repr__(self) -> str:
        return f"OrdinalityEngine(converter={self._cv!r})"
