"""
Closed-form proleptic Gregorian day arithmetic.

Day numbers count days since 1970-01-01 (day 0, a Thursday).  Conversions use
400-year era decomposition with floor division, so they are exact for every
signed day number without iteration or tables.  Every function accepts NumPy
arrays wherever a scalar is accepted, and returns plain ints for scalar input.
"""

from __future__ import annotations

from typing import Union

import numpy as np

IntLike = Union[int, "np.ndarray"]

DAYS_PER_ERA: int = 146097          # days in 400 Gregorian years
EPOCH_SHIFT: int = 719468           # 0000-03-01 to 1970-01-01
EPOCH_WEEKDAY_SHIFT: int = 4        # 1970-01-01 is weekday 5 (Thursday)


def _as_int64(x) -> np.ndarray:
    return np.atleast_1d(np.asarray(x, dtype=np.int64))


# ── civil <-> day number ─────────────────────────────────────────────────────

def days_from_civil(year: IntLike, month: IntLike, day: IntLike) -> IntLike:
    """
    Day number of (year, month, day).

    Month and day need not be in range: months carry into the year and days
    are counted linearly from the first of the month, so day 0 is the last
    day of the previous month and month 13 is January of the next year.
    """
    scalar = np.ndim(year) == 0 and np.ndim(month) == 0 and np.ndim(day) == 0
    y, m, d = np.broadcast_arrays(_as_int64(year), _as_int64(month), _as_int64(day))

    y = y + np.floor_divide(m - 1, 12)
    m = np.mod(m - 1, 12) + 1

    # Years start in March so the leap day is the last day of the year.
    y = y - (m <= 2)
    era = np.floor_divide(y, 400)
    yoe = y - era * 400
    mp = np.where(m > 2, m - 3, m + 9)
    doy = (153 * mp + 2) // 5 + d - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    result = era * DAYS_PER_ERA + doe - EPOCH_SHIFT
    return int(result.flat[0]) if scalar else result


def civil_from_days(days: IntLike):
    """Inverse of days_from_civil: returns (year, month, day)."""
    scalar = np.ndim(days) == 0
    z = _as_int64(days) + EPOCH_SHIFT

    era = np.floor_divide(z, DAYS_PER_ERA)
    doe = z - era * DAYS_PER_ERA
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = np.where(mp < 10, mp + 3, mp - 9)
    year = yoe + era * 400 + (month <= 2)

    if scalar:
        return int(year[0]), int(month[0]), int(day[0])
    return year, month, day


# ── derived quantities ───────────────────────────────────────────────────────

def weekday_from_days(days: IntLike) -> IntLike:
    """Weekday of a day number, 1 = Sunday ... 7 = Saturday."""
    scalar = np.ndim(days) == 0
    result = np.mod(_as_int64(days) + EPOCH_WEEKDAY_SHIFT, 7) + 1
    return int(result[0]) if scalar else result


def is_leap_year(year: IntLike):
    scalar = np.ndim(year) == 0
    y = _as_int64(year)
    result = (np.mod(y, 4) == 0) & ((np.mod(y, 100) != 0) | (np.mod(y, 400) == 0))
    return bool(result[0]) if scalar else result


def days_in_month(year: IntLike, month: IntLike) -> IntLike:
    """Length of a month as the distance between consecutive month starts."""
    return _difference(
        days_from_civil(year, np.add(month, 1), 1),
        days_from_civil(year, month, 1),
    )


def days_in_year(year: IntLike) -> IntLike:
    leap = is_leap_year(year)
    if isinstance(leap, bool):
        return 366 if leap else 365
    return np.where(leap, 366, 365)


def _difference(a: IntLike, b: IntLike) -> IntLike:
    if np.ndim(a) == 0:
        return int(a) - int(b)
    return np.asarray(a) - np.asarray(b)


# ── week numbering ───────────────────────────────────────────────────────────

def relative_weekday(weekday: int, first_weekday: int) -> int:
    """Zero-based position of a weekday within a week starting on first_weekday."""
    return (weekday - first_weekday) % 7


def week_number(
    desired_day: int,
    day_of_period: int,
    weekday: int,
    first_weekday: int,
    minimum_days: int,
) -> int:
    """
    Week number of `desired_day` within a period (month, quarter, year, ...).

    `day_of_period` is the one-based position of a reference day whose
    weekday is `weekday`.  The first, possibly partial, week of the period
    counts as week 1 only when it holds at least `minimum_days` days;
    otherwise days before the first full week are in week 0.
    """
    period_start = (weekday - first_weekday - day_of_period + 1) % 7
    week = (desired_day + period_start - 1) // 7
    if 7 - period_start >= minimum_days:
        week += 1
    return week


def first_week_start(period_start_day: int, first_weekday: int, minimum_days: int) -> int:
    """
    Day number on which week 1 of a period starting on `period_start_day` begins.

    May precede the period when the first partial week is long enough to count.
    """
    lead = relative_weekday(weekday_from_days(period_start_day), first_weekday)
    start = period_start_day - lead
    if 7 - lead < minimum_days:
        start += 7
    return start
