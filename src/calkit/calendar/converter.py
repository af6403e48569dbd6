from __future__ import annotations

import logging
import math
from typing import Iterable, NamedTuple, Optional

from calkit.timezone import RepeatedTimePolicy, TimeBasis

from .components import DateComponents
from .config import CalendarConfiguration
from .days import (
    civil_from_days,
    days_from_civil,
    days_in_month,
    days_in_year,
    first_week_start,
    relative_weekday,
    week_number,
    weekday_from_days,
)
from .units import ALL_UNITS, CalendarUnit

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
NANOSECONDS_PER_SECOND = 1_000_000_000

U = CalendarUnit


class LocalDate(NamedTuple):
    """A local day plus wall-clock seconds into it; year is the extended year."""

    days: int
    seconds: float
    year: int
    month: int
    day: int
    weekday: int
    day_of_year: int

    @property
    def wall(self) -> float:
        return self.days * SECONDS_PER_DAY + self.seconds


class FieldConverter:
    """
    Converts absolute time to calendar components and back.

    Absolute time is float seconds since 1970-01-01T00:00:00Z.  Each
    conversion consults the TimeBasis once: instant → local wall-clock
    seconds, or local wall-clock seconds → instant under the fold/gap policy.
    """

    def __init__(self, config: CalendarConfiguration) -> None:
        self._config = config
        self._basis = TimeBasis(config.time_zone)
        self._first_weekday = config.first_weekday
        self._minimum_days = config.minimum_days_in_first_week

    @property
    def config(self) -> CalendarConfiguration:
        return self._config

    def next_transition(self, after: float) -> Optional[float]:
        return self._basis.rules.next_transition(after)

    # ── absolute → local ─────────────────────────────────────────────────

    def local_date(self, at: float) -> LocalDate:
        return self.local_date_from_wall(self._basis.to_local(at))

    def local_date_from_wall(self, wall: float) -> LocalDate:
        days = math.floor(wall / SECONDS_PER_DAY)
        seconds = wall - days * SECONDS_PER_DAY
        if seconds >= SECONDS_PER_DAY:
            # float rounding just below a day boundary
            days += 1
            seconds = 0.0
        return self.local_day(days, seconds)

    def local_day(self, days: int, seconds: float = 0.0) -> LocalDate:
        year, month, day = civil_from_days(days)
        doy = days - days_from_civil(year, 1, 1) + 1
        return LocalDate(days, seconds, year, month, day, weekday_from_days(days), doy)

    def to_absolute(
        self,
        wall: float,
        repeated: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
        skipped: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
    ) -> float:
        return self._basis.to_absolute(wall, repeated, skipped)

    # ── week numbering ───────────────────────────────────────────────────

    def week_of_year(self, local: LocalDate) -> tuple[int, int]:
        """(week of year, year for week of year) of a local day."""
        fw, md = self._first_weekday, self._minimum_days
        doy, dow = local.day_of_year, local.weekday

        rel_dow = (dow + 7 - fw) % 7
        rel_dow_jan1 = (dow - doy + 7001 - fw) % 7
        woy = (doy - 1 + rel_dow_jan1) // 7
        if 7 - rel_dow_jan1 >= md:
            woy += 1
        year_woy = local.year

        if woy == 0:
            # Belongs to the last week of the previous year.
            prev_doy = doy + days_in_year(local.year - 1)
            woy = week_number(prev_doy, prev_doy, dow, fw, md)
            year_woy -= 1
        else:
            last_doy = days_in_year(local.year)
            if doy >= last_doy - 5:
                last_rel_dow = (rel_dow + last_doy - doy) % 7
                if 6 - last_rel_dow >= md and doy + 7 - rel_dow > last_doy:
                    woy = 1
                    year_woy += 1
        return woy, year_woy

    def week_of_month(self, local: LocalDate) -> int:
        return week_number(
            local.day, local.day, local.weekday, self._first_weekday, self._minimum_days
        )

    def week_in_period(self, day_of_period: int, weekday: int) -> int:
        return week_number(
            day_of_period, day_of_period, weekday, self._first_weekday, self._minimum_days
        )

    def relative_weekday(self, weekday: int) -> int:
        return relative_weekday(weekday, self._first_weekday)

    def first_week_start(self, period_start_day: int) -> int:
        return first_week_start(period_start_day, self._first_weekday, self._minimum_days)

    def period_start_day(self, unit: CalendarUnit, local: LocalDate) -> Optional[int]:
        """
        First local day of the `unit` value containing `local`.

        None for era 0, which has no beginning.  Time-of-day units start on
        the local day itself.
        """
        if unit is U.ERA:
            return days_from_civil(1, 1, 1) if local.year >= 1 else None
        if unit is U.YEAR:
            return days_from_civil(local.year, 1, 1)
        if unit is U.YEAR_FOR_WEEK_OF_YEAR:
            _, year_woy = self.week_of_year(local)
            return self.first_week_start(days_from_civil(year_woy, 1, 1))
        if unit is U.QUARTER:
            return days_from_civil(local.year, (local.month - 1) // 3 * 3 + 1, 1)
        if unit is U.MONTH:
            return days_from_civil(local.year, local.month, 1)
        if unit is U.WEEK_OF_MONTH or unit is U.WEEK_OF_YEAR:
            return local.days - self.relative_weekday(local.weekday)
        return local.days

    # ── absolute → components ────────────────────────────────────────────

    def components(self, units: Iterable[CalendarUnit], at: float) -> DateComponents:
        """Calendar fields of an instant; only the requested units are filled in."""
        return self.components_of(set(units), self.local_date(at))

    def components_of(self, units: set[CalendarUnit], local: LocalDate) -> DateComponents:
        dc = DateComponents()

        if U.ERA in units or U.YEAR in units:
            era, year = (1, local.year) if local.year >= 1 else (0, 1 - local.year)
            if U.ERA in units:
                dc.era = era
            if U.YEAR in units:
                dc.year = year
        if U.MONTH in units:
            dc.month = local.month
        if U.DAY in units:
            dc.day = local.day
        if U.QUARTER in units:
            dc.quarter = (local.month - 1) // 3 + 1
        if U.WEEKDAY in units:
            dc.weekday = local.weekday
        if U.WEEKDAY_ORDINAL in units:
            dc.weekday_ordinal = (local.day - 1) // 7 + 1
        if U.WEEK_OF_MONTH in units:
            dc.week_of_month = self.week_of_month(local)
        if U.WEEK_OF_YEAR in units or U.YEAR_FOR_WEEK_OF_YEAR in units:
            woy, year_woy = self.week_of_year(local)
            if U.WEEK_OF_YEAR in units:
                dc.week_of_year = woy
            if U.YEAR_FOR_WEEK_OF_YEAR in units:
                dc.year_for_week_of_year = year_woy

        if units & {U.HOUR, U.MINUTE, U.SECOND, U.NANOSECOND}:
            whole = math.floor(local.seconds)
            hour, rem = divmod(whole, 3600)
            minute, second = divmod(rem, 60)
            if U.HOUR in units:
                dc.hour = hour
            if U.MINUTE in units:
                dc.minute = minute
            if U.SECOND in units:
                dc.second = second
            if U.NANOSECOND in units:
                nanos = int(round((local.seconds - whole) * NANOSECONDS_PER_SECOND))
                dc.nanosecond = min(nanos, NANOSECONDS_PER_SECOND - 1)
        return dc

    def all_components(self, at: float) -> DateComponents:
        return self.components(ALL_UNITS, at)

    # ── components → absolute ────────────────────────────────────────────

    def date_from(
        self,
        dc: DateComponents,
        repeated: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
        skipped: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
    ) -> Optional[float]:
        """
        Instant described by `dc`, or None when the fields cannot anchor a date.

        Fields resolve by priority: day of month, then week of year with
        weekday, then week of month with weekday, then weekday ordinal with
        weekday, then the first of the month.  Out-of-range values carry into
        the adjacent larger unit.
        """
        days = self.day_number(dc)
        if days is None:
            logger.debug("Components do not anchor a date: %r", dc)
            return None
        wall = days * SECONDS_PER_DAY + time_of_day_seconds(dc)
        return self._basis.to_absolute(wall, repeated, skipped)

    def day_number(self, dc: DateComponents) -> Optional[int]:
        fw = self._first_weekday
        month = dc.month if dc.month is not None else 1
        weekday = dc.weekday

        if dc.year is None and dc.year_for_week_of_year is None:
            return None

        if dc.day is not None:
            year = dc.year if dc.year is not None else dc.year_for_week_of_year
            return days_from_civil(self._extended_year(dc, year), month, dc.day)

        if dc.week_of_year is not None or dc.year is None:
            # year_for_week_of_year takes precedence when a week of year is given.
            year = dc.year_for_week_of_year if dc.year_for_week_of_year is not None else dc.year
            week = dc.week_of_year if dc.week_of_year is not None else 1
            start = self.first_week_start(days_from_civil(self._extended_year(dc, year), 1, 1))
            return start + (week - 1) * 7 + relative_weekday(weekday if weekday is not None else fw, fw)

        year = self._extended_year(dc, dc.year)
        first = days_from_civil(year, month, 1)

        if dc.week_of_month is not None and weekday is not None:
            return self.first_week_start(first) + (dc.week_of_month - 1) * 7 + relative_weekday(weekday, fw)

        if dc.weekday_ordinal is not None:
            if weekday is None:
                return None
            # First occurrence of the weekday in the month, one-based.
            date = 1 + (weekday - weekday_from_days(first)) % 7
            ordinal = dc.weekday_ordinal
            if ordinal >= 0:
                date += 7 * (ordinal - 1)
            else:
                length = days_in_month(year, month)
                date += ((length - date) // 7 + ordinal + 1) * 7
            return first + date - 1

        return first

    @staticmethod
    def _extended_year(dc: DateComponents, year: int) -> int:
        return 1 - year if dc.era == 0 else year

    def __repr__(self) -> str:
        return f"FieldConverter(config={self._config!r})"


def time_of_day_seconds(dc: DateComponents) -> float:
    return (
        (dc.hour or 0) * 3600
        + (dc.minute or 0) * 60
        + (dc.second or 0)
        + (dc.nanosecond or 0) / NANOSECONDS_PER_SECOND
    )
