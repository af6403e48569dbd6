"""
tests/calendar/test_ordinality.py

Covers:
  - Date units inside date units (era, year, quarter, month, weeks)
  - Time-of-day units inside day-sized and larger periods
  - Wall-clock counting on 23- and 25-hour days
  - Era 0
  - Unit pairs that do not nest
"""

from __future__ import annotations

import pytest

from calkit.calendar import CalendarConfiguration, CalendarUnit as U, DateComponents, GregorianCalendar
from calkit.timezone import FixedOffsetZone, time_zone_for

DEC31 = 852045787.0  # 1996-12-31 16:23:07 at UTC+1, a Tuesday
APR07 = 828838987.0  # 1996-04-07 01:03:07 at UTC+1, a Sunday


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def plus_one():
    """UTC+1, weeks start on Thursday, four days make a first week."""
    return GregorianCalendar(CalendarConfiguration(5, 4, FixedOffsetZone(3600)))


@pytest.fixture
def los_angeles():
    return GregorianCalendar(CalendarConfiguration(5, 4, time_zone_for("America/Los_Angeles")))


# ── Date units ────────────────────────────────────────────────────────────────

class TestDateUnits:

    @pytest.mark.parametrize(
        "small, large, expected",
        [
            (U.YEAR, U.ERA, 1996),
            (U.MONTH, U.ERA, 23952),
            (U.DAY, U.ERA, 729024),
            (U.WEEKDAY, U.ERA, 104147),
            (U.WEEKDAY_ORDINAL, U.ERA, 104147),
            (U.QUARTER, U.ERA, 7984),
            (U.WEEK_OF_MONTH, U.ERA, 104146),
            (U.MONTH, U.YEAR, 12),
            (U.DAY, U.YEAR, 366),
            (U.WEEKDAY, U.YEAR, 53),
            (U.QUARTER, U.YEAR, 4),
            (U.WEEK_OF_YEAR, U.YEAR, 52),
            (U.DAY, U.MONTH, 31),
            (U.WEEKDAY, U.MONTH, 5),
            (U.WEEK_OF_MONTH, U.MONTH, 5),
            (U.DAY, U.WEEK_OF_MONTH, 6),
            (U.WEEKDAY, U.WEEK_OF_MONTH, 6),
            (U.MONTH, U.QUARTER, 3),
            (U.DAY, U.QUARTER, 92),
            (U.WEEKDAY, U.QUARTER, 14),
            (U.WEEK_OF_MONTH, U.QUARTER, 13),
            (U.WEEK_OF_YEAR, U.QUARTER, 13),
            (U.DAY, U.WEEK_OF_YEAR, 6),
        ],
    )
    def test_end_of_year(self, plus_one, small, large, expected):
        assert plus_one.ordinality(small, large, DEC31) == expected

    @pytest.mark.parametrize(
        "small, large, expected",
        [
            (U.DAY, U.WEEK_OF_MONTH, 4),
            (U.DAY, U.WEEK_OF_YEAR, 4),
            (U.MONTH, U.ERA, 23944),
            (U.DAY, U.ERA, 728756),
            (U.WEEKDAY, U.ERA, 104108),
            (U.QUARTER, U.ERA, 7982),
            (U.MONTH, U.YEAR, 4),
            (U.DAY, U.YEAR, 98),
            (U.WEEKDAY, U.YEAR, 14),
            (U.WEEK_OF_YEAR, U.YEAR, 14),
            (U.DAY, U.MONTH, 7),
            (U.WEEKDAY, U.MONTH, 1),
            (U.WEEK_OF_MONTH, U.MONTH, 1),
            (U.MONTH, U.QUARTER, 1),
            (U.DAY, U.QUARTER, 7),
            (U.WEEK_OF_MONTH, U.QUARTER, 1),
            (U.WEEK_OF_YEAR, U.QUARTER, 1),
        ],
    )
    def test_early_april(self, plus_one, small, large, expected):
        assert plus_one.ordinality(small, large, APR07) == expected

    def test_first_and_last_day_of_month(self):
        cal = GregorianCalendar()
        first = cal.date_from(DateComponents(year=2024, month=2, day=1))
        last = cal.date_from(DateComponents(year=2024, month=3, day=1)) - 1
        assert cal.ordinality(U.DAY, U.MONTH, first) == 1
        assert cal.ordinality(U.DAY, U.MONTH, last) == 29


# ── Time units ────────────────────────────────────────────────────────────────

class TestTimeUnits:

    @pytest.mark.parametrize(
        "small, large, expected",
        [
            (U.MINUTE, U.HOUR, 24),
            (U.SECOND, U.HOUR, 1388),
            (U.NANOSECOND, U.HOUR, 1387000000001),
            (U.SECOND, U.MINUTE, 8),
            (U.NANOSECOND, U.MINUTE, 7000000001),
            (U.NANOSECOND, U.SECOND, 1),
            (U.HOUR, U.DAY, 17),
            (U.HOUR, U.WEEKDAY, 17),
            (U.MINUTE, U.DAY, 16 * 60 + 23 + 1),
        ],
    )
    def test_fixed_zone(self, plus_one, small, large, expected):
        assert plus_one.ordinality(small, large, DEC31) == expected

    def test_early_april(self, plus_one):
        assert plus_one.ordinality(U.MINUTE, U.HOUR, APR07) == 4
        assert plus_one.ordinality(U.SECOND, U.HOUR, APR07) == 188

    def test_hour_in_week(self, plus_one):
        # Tuesday is the sixth day of a Thursday-based week.
        assert plus_one.ordinality(U.HOUR, U.WEEK_OF_YEAR, DEC31) == 5 * 24 + 17


class TestWallClock:

    @pytest.mark.parametrize(
        "at, hour_in_month, minute_in_month, hour_in_day, minute_in_day",
        [
            (851990400.0, 713, 42721, 17, 961),
            (820483200.0, 1, 1, 1, 1),
            (828867787.0, 146, 8704, 2, 64),
            (828871387.0, 148, 8824, 4, 184),
            (828874987.0, 149, 8884, 5, 244),
            (846414187.0, 628, 37624, 4, 184),
            (845121787.0, 270, 16144, 6, 304),
        ],
    )
    def test_los_angeles(self, los_angeles, at, hour_in_month, minute_in_month, hour_in_day, minute_in_day):
        assert los_angeles.ordinality(U.HOUR, U.MONTH, at) == hour_in_month
        assert los_angeles.ordinality(U.MINUTE, U.MONTH, at) == minute_in_month
        assert los_angeles.ordinality(U.HOUR, U.DAY, at) == hour_in_day
        assert los_angeles.ordinality(U.MINUTE, U.DAY, at) == minute_in_day

    def test_scenario_hour_in_day_before_spring_forward(self, los_angeles):
        # 1996-04-07T01:03:07-08:00
        assert los_angeles.ordinality(U.HOUR, U.DAY, 828867787.0) == 2

    def test_both_passes_of_a_repeated_hour(self):
        cal = GregorianCalendar.with_zone(time_zone_for("America/Los_Angeles"))
        first = cal.date_from(DateComponents(year=2023, month=11, day=5, hour=1, minute=30))
        assert cal.ordinality(U.HOUR, U.DAY, first) == 2
        assert cal.ordinality(U.HOUR, U.DAY, first + 3600) == 2
        assert cal.ordinality(U.HOUR, U.DAY, first + 7200) == 3


# ── None results ──────────────────────────────────────────────────────────────

class TestUndefined:

    @pytest.mark.parametrize(
        "small, large",
        [
            (U.YEAR, U.MONTH),
            (U.MONTH, U.MONTH),
            (U.WEEK_OF_YEAR, U.MONTH),
            (U.WEEKDAY_ORDINAL, U.WEEK_OF_MONTH),
            (U.ERA, U.YEAR),
            (U.DAY, U.HOUR),
            (U.YEAR_FOR_WEEK_OF_YEAR, U.YEAR),
        ],
    )
    def test_incompatible_pairs(self, plus_one, small, large):
        assert plus_one.ordinality(small, large, DEC31) is None

    def test_era_zero(self):
        cal = GregorianCalendar()
        bc = cal.date_from(DateComponents(era=0, year=5, month=3, day=1))
        assert cal.ordinality(U.YEAR, U.ERA, bc) == 5
        assert cal.ordinality(U.DAY, U.ERA, bc) is None
        assert cal.ordinality(U.DAY, U.YEAR, bc) == 31 + 29 + 1

    def test_week_year_zero_in_era_one(self):
        # 0001-01-01 is a Monday; with Sunday weeks and a full first week it
        # belongs to week-year 0.
        sunday = GregorianCalendar(CalendarConfiguration(1, 7, FixedOffsetZone(0)))
        at = sunday.date_from(DateComponents(year=1, month=1, day=1))
        assert sunday.ordinality(U.YEAR_FOR_WEEK_OF_YEAR, U.ERA, at) is None

        monday = GregorianCalendar(CalendarConfiguration(2, 7, FixedOffsetZone(0)))
        assert monday.ordinality(U.YEAR_FOR_WEEK_OF_YEAR, U.ERA, at) == 1
