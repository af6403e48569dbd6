from __future__ import annotations

import math
from typing import Optional

from calkit.timezone import RepeatedTimePolicy

from .converter import NANOSECONDS_PER_SECOND, SECONDS_PER_DAY, FieldConverter, LocalDate
from .days import days_from_civil, days_in_month
from .units import CalendarUnit

U = CalendarUnit

_UNIT_SECONDS = {U.HOUR: 3600, U.MINUTE: 60, U.SECOND: 1}

# Years representable in the widest supported range; eras are open-ended.
MIN_LARGEST_YEAR = 140742
MAX_LARGEST_YEAR = 144683

_FIXED_RANGES: dict[CalendarUnit, tuple[range, range]] = {
    U.ERA: (range(0, 2), range(0, 2)),
    U.YEAR: (range(1, MIN_LARGEST_YEAR + 1), range(1, MAX_LARGEST_YEAR + 1)),
    U.YEAR_FOR_WEEK_OF_YEAR: (range(1, MIN_LARGEST_YEAR + 1), range(1, MAX_LARGEST_YEAR + 1)),
    U.QUARTER: (range(1, 5), range(1, 5)),
    U.MONTH: (range(1, 13), range(1, 13)),
    U.WEEK_OF_YEAR: (range(1, 53), range(1, 54)),
    U.DAY: (range(1, 29), range(1, 32)),
    U.WEEKDAY: (range(1, 8), range(1, 8)),
    U.WEEKDAY_ORDINAL: (range(1, 5), range(1, 6)),
    U.HOUR: (range(0, 24), range(0, 24)),
    U.MINUTE: (range(0, 60), range(0, 60)),
    U.SECOND: (range(0, 60), range(0, 60)),
    U.NANOSECOND: (range(0, NANOSECONDS_PER_SECOND), range(0, NANOSECONDS_PER_SECOND)),
}


class UnitTruncator:
    """
    Start-of-unit truncation, unit intervals and field value ranges.

    Day-level starts are local midnights resolved with the FORMER policy, so
    a midnight skipped by DST becomes the transition instant.  Hour, minute
    and second starts subtract the elapsed wall-clock time from the instant,
    which keeps the second pass through a repeated hour in that pass.  When
    the offset changes part way through such a unit, the unit starts at the
    transition instead.
    """

    def __init__(self, converter: FieldConverter) -> None:
        self._cv = converter

    # ── truncation ───────────────────────────────────────────────────────

    def start_of(self, unit: CalendarUnit, at: float) -> Optional[float]:
        if unit is U.NANOSECOND:
            return at
        local = self._cv.local_date(at)
        if unit in _UNIT_SECONDS:
            return self._start_of_clock_unit(_UNIT_SECONDS[unit], at, local)

        start = self._cv.period_start_day(unit, local)
        if start is None:
            return None
        return self._midnight(start)

    def _start_of_clock_unit(self, length: int, at: float, local: LocalDate) -> float:
        elapsed = math.fmod(local.seconds, length)
        candidate = at - elapsed
        # Offsets are whole seconds.
        if abs(self._cv.local_date(candidate).wall - (local.wall - elapsed)) < 0.5:
            return candidate
        # An offset change inside the unit; it starts at the transition.
        transition = self._cv.next_transition(candidate)
        if transition is not None and candidate < transition <= at:
            return transition
        return candidate

    def date_interval(self, unit: CalendarUnit, at: float) -> Optional[tuple[float, float]]:
        """(start, duration) of the `unit` value containing `at`.

        Era 1 has no end and reports an infinite duration; era 0 has no start
        and gives None.
        """
        start = self.start_of(unit, at)
        if start is None:
            return None
        if unit is U.NANOSECOND:
            return start, 1 / NANOSECONDS_PER_SECOND
        if unit in _UNIT_SECONDS:
            length = _UNIT_SECONDS[unit]
            end = self.start_of(unit, start + length)
            if end <= start:
                end = start + length
            return start, end - start
        if unit is U.ERA:
            return start, math.inf

        local = self._cv.local_date(at)
        end = self._midnight(self._next_start_day(unit, local))
        return start, end - start

    def _next_start_day(self, unit: CalendarUnit, local: LocalDate) -> int:
        if unit is U.YEAR:
            return days_from_civil(local.year + 1, 1, 1)
        if unit is U.YEAR_FOR_WEEK_OF_YEAR:
            _, year_woy = self._cv.week_of_year(local)
            return self._cv.first_week_start(days_from_civil(year_woy + 1, 1, 1))
        if unit is U.QUARTER:
            return days_from_civil(local.year, (local.month - 1) // 3 * 3 + 4, 1)
        if unit is U.MONTH:
            return days_from_civil(local.year, local.month + 1, 1)
        start = self._cv.period_start_day(unit, local)
        if unit is U.WEEK_OF_MONTH or unit is U.WEEK_OF_YEAR:
            return start + 7
        return start + 1

    def _midnight(self, days: int) -> float:
        return self._cv.to_absolute(
            days * SECONDS_PER_DAY, RepeatedTimePolicy.FORMER, RepeatedTimePolicy.FORMER
        )

    # ── field ranges ─────────────────────────────────────────────────────

    def minimum_range(self, unit: CalendarUnit) -> range:
        """Values every instance of the field takes (greatest minimum to least maximum)."""
        if unit is U.WEEK_OF_MONTH:
            lows, highs = self._week_of_month_bounds(28)
            return range(max(lows), min(highs) + 1)
        return _FIXED_RANGES[unit][0]

    def maximum_range(self, unit: CalendarUnit) -> range:
        """Values some instance of the field can take (least minimum to greatest maximum)."""
        if unit is U.WEEK_OF_MONTH:
            lows, highs = self._week_of_month_bounds(31)
            return range(min(lows), max(highs) + 1)
        return _FIXED_RANGES[unit][1]

    def _week_of_month_bounds(self, length: int) -> tuple[list[int], list[int]]:
        """First and last week numbers of a month of `length` days, for each starting weekday."""
        week = self._cv.week_in_period
        lows, highs = [], []
        for weekday in range(1, 8):
            lows.append(week(1, weekday))
            highs.append(week(length, (weekday - 1 + length - 1) % 7 + 1))
        return lows, highs

    def range_of(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[range]:
        """
        Values `small` takes within the `large` value containing `at`.

        Day in month gives 1..28 through 1..31, month in quarter gives the
        quarter's three months, hour in day gives 0..23.  None when the
        units do not nest.
        """
        if not small.is_within(large):
            return None
        if small.is_time_of_day or small is U.WEEKDAY or small is U.QUARTER:
            return self.maximum_range(small)

        local = self._cv.local_date(at)

        if small is U.YEAR or small is U.YEAR_FOR_WEEK_OF_YEAR:
            return self.maximum_range(small)

        if small is U.MONTH:
            if large is U.QUARTER:
                first = (local.month - 1) // 3 * 3 + 1
                return range(first, first + 3)
            return range(1, 13)

        if small is U.DAY:
            length = days_in_month(local.year, local.month)
            if large is U.MONTH:
                return range(1, length + 1)
            if large in (U.WEEK_OF_MONTH, U.WEEK_OF_YEAR):
                start = local.day - self._cv.relative_weekday(local.weekday)
                return range(max(start, 1), min(start + 6, length) + 1)
            return self.maximum_range(U.DAY)

        if small is U.WEEKDAY_ORDINAL:
            if large is U.MONTH:
                length = days_in_month(local.year, local.month)
                return range(1, (length - 1) // 7 + 2)
            return self.maximum_range(U.WEEKDAY_ORDINAL)

        if small is U.WEEK_OF_MONTH:
            if large is U.ERA:
                return self.maximum_range(U.WEEK_OF_MONTH)
            return self._week_of_month_span(large, local)

        # week_of_year
        if large is U.ERA:
            return self.maximum_range(U.WEEK_OF_YEAR)
        return self._week_of_year_span(large, local)

    def _months_of(self, large: CalendarUnit, local: LocalDate) -> range:
        if large is U.MONTH:
            return range(local.month, local.month + 1)
        if large is U.QUARTER:
            first = (local.month - 1) // 3 * 3 + 1
            return range(first, first + 3)
        return range(1, 13)

    def _week_of_month_span(self, large: CalendarUnit, local: LocalDate) -> range:
        low, high = None, None
        for month in self._months_of(large, local):
            first = self._cv.local_day(days_from_civil(local.year, month, 1))
            last = self._cv.local_day(
                days_from_civil(local.year, month, days_in_month(local.year, month))
            )
            first_week = self._cv.week_of_month(first)
            last_week = self._cv.week_of_month(last)
            low = first_week if low is None else min(low, first_week)
            high = last_week if high is None else max(high, last_week)
        return range(low, high + 1)

    def _week_of_year_span(self, large: CalendarUnit, local: LocalDate) -> range:
        months = self._months_of(large, local)
        year = local.year
        first = self._cv.local_day(days_from_civil(year, months[0], 1))
        last = self._cv.local_day(days_from_civil(year, months[-1] + 1, 0))

        week, year_woy = self._cv.week_of_year(first)
        low = week if year_woy == year else 1
        week, year_woy = self._cv.week_of_year(last)
        high = week if year_woy == year else self._weeks_in_week_year(year)
        return range(low, high + 1)

    def _weeks_in_week_year(self, year: int) -> int:
        start = self._cv.first_week_start(days_from_civil(year, 1, 1))
        end = self._cv.first_week_start(days_from_civil(year + 1, 1, 1))
        return (end - start) // 7

    def __repr__(self) -> str:
        return f"UnitTruncator(converter={self._cv!r})"
