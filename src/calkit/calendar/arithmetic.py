from __future__ import annotations

from .components import DateComponents
from .converter import SECONDS_PER_DAY, NANOSECONDS_PER_SECOND, FieldConverter, LocalDate
from .days import days_from_civil, days_in_month, days_in_year, week_number
from .units import ADD_ORDER, CalendarUnit

U = CalendarUnit

_SECONDS_PER_UNIT = {U.HOUR: 3600, U.MINUTE: 60, U.SECOND: 1}
_DAYS_PER_UNIT = {
    U.DAY: 1,
    U.WEEKDAY: 1,
    U.WEEK_OF_YEAR: 7,
    U.WEEK_OF_MONTH: 7,
    U.WEEKDAY_ORDINAL: 7,
}


class FieldArithmetic:
    """
    Adds signed amounts of calendar units to an instant.

    Non-wrapping adds carry into larger units.  Date-sized units move the
    local wall clock and are resolved back through the time zone, so the
    time of day survives a DST change; hours and smaller move elapsed time.

    Wrapping adds cycle a field within its containing unit and leave the
    container alone.  Era is unchanged either way.
    """

    def __init__(self, converter: FieldConverter) -> None:
        self._cv = converter
        self._first_weekday = converter.config.first_weekday
        self._minimum_days = converter.config.minimum_days_in_first_week

    # ── public ───────────────────────────────────────────────────────────

    def add(self, amounts: DateComponents, at: float, wrap: bool = False) -> float:
        """Apply every present field of `amounts`, coarsest first."""
        result = at
        for unit in ADD_ORDER:
            amount = amounts.value(unit)
            if amount:
                result = self.add_unit(unit, amount, result, wrap)
        return result

    def add_unit(self, unit: CalendarUnit, amount: int, at: float, wrap: bool = False) -> float:
        if amount == 0 or unit is U.ERA:
            return at
        if unit is U.NANOSECOND:
            return at + amount / NANOSECONDS_PER_SECOND
        if wrap:
            return self._roll(unit, amount, at)
        return self._add(unit, amount, at)

    # ── non-wrapping ─────────────────────────────────────────────────────

    def _add(self, unit: CalendarUnit, amount: int, at: float) -> float:
        if unit in _SECONDS_PER_UNIT:
            return at + amount * _SECONDS_PER_UNIT[unit]

        local = self._cv.local_date(at)
        if unit in _DAYS_PER_UNIT:
            return self._at_day(local, local.days + amount * _DAYS_PER_UNIT[unit])
        if unit is U.YEAR:
            return self._at_month(local, local.year + amount, local.month)
        if unit is U.MONTH:
            return self._at_month(local, local.year, local.month + amount)
        if unit is U.QUARTER:
            return self._at_month(local, local.year, local.month + 3 * amount)
        if unit is U.YEAR_FOR_WEEK_OF_YEAR:
            week, year_woy = self._cv.week_of_year(local)
            return self._at_week(local, year_woy + amount, week)
        raise ValueError(f"Unsupported unit for addition: {unit!r}")

    # ── wrapping ─────────────────────────────────────────────────────────

    def _roll(self, unit: CalendarUnit, amount: int, at: float) -> float:
        if unit in _SECONDS_PER_UNIT:
            return self._roll_time(unit, amount, at)

        local = self._cv.local_date(at)

        if unit is U.YEAR:
            return self._at_month(local, _roll_era_year(local.year, amount), local.month)

        if unit is U.YEAR_FOR_WEEK_OF_YEAR:
            week, year_woy = self._cv.week_of_year(local)
            if local.year >= 1:
                new_year = max(year_woy + amount, 1)
            else:
                new_year = _roll_era_year(year_woy, amount)
            return self._at_week(local, new_year, week)

        if unit is U.QUARTER:
            return self._at_month(local, local.year, (local.month - 1 + 3 * amount) % 12 + 1)

        if unit is U.MONTH:
            return self._at_month(local, local.year, (local.month - 1 + amount) % 12 + 1)

        if unit is U.DAY:
            length = days_in_month(local.year, local.month)
            day = (local.day - 1 + amount) % length + 1
            return self._at_day(local, local.days + day - local.day)

        if unit is U.WEEKDAY:
            lead = self._cv.relative_weekday(local.weekday)
            shift = (lead + amount) % 7 - lead
            return at + shift * SECONDS_PER_DAY

        if unit is U.WEEKDAY_ORDINAL:
            length = days_in_month(local.year, local.month)
            pre = (local.day - 1) // 7
            post = (length - local.day) // 7
            shift = (pre + amount) % (pre + post + 1) - pre
            return at + shift * 7 * SECONDS_PER_DAY

        if unit is U.WEEK_OF_MONTH:
            day = self._roll_week_of_month(local, amount)
            return self._at_day(local, local.days + day - local.day)

        if unit is U.WEEK_OF_YEAR:
            week, year_woy = self._roll_week_of_year(local, amount)
            return self._at_week(local, year_woy, week)

        raise ValueError(f"Unsupported unit for wrapping addition: {unit!r}")

    def _roll_time(self, unit: CalendarUnit, amount: int, at: float) -> float:
        dc = self._cv.components((unit,), at)
        old = dc.value(unit)
        cycle = 24 if unit is U.HOUR else 60
        new = (old + amount) % cycle
        return at + (new - old) * _SECONDS_PER_UNIT[unit]

    def _roll_week_of_month(self, local: LocalDate, amount: int) -> int:
        """New day of month after rolling the week within the month's block of weeks."""
        dow = self._cv.relative_weekday(local.weekday)
        first_dow = (dow - local.day + 1) % 7

        # First day of the first counted week; may be zero or negative.
        if 7 - first_dow < self._minimum_days:
            start = 8 - first_dow
        else:
            start = 1 - first_dow

        length = days_in_month(local.year, local.month)
        last_dow = (length - local.day + dow) % 7
        limit = length + 7 - last_dow

        gap = limit - start
        day = (local.day + amount * 7 - start) % gap + start
        return min(max(day, 1), length)

    def _roll_week_of_year(self, local: LocalDate, amount: int) -> tuple[int, int]:
        """(week, year for week of year) after rolling within the week-numbering year."""
        week, year_woy = self._cv.week_of_year(local)
        day_of_year = local.day_of_year
        if local.month == 1:
            if week >= 52:
                day_of_year += days_in_year(year_woy)
        elif week == 1:
            day_of_year -= days_in_year(year_woy - 1)

        week += amount
        if week < 1 or week > 52:
            last_doy = days_in_year(year_woy)
            last_rel_dow = (
                last_doy - day_of_year + local.weekday - self._first_weekday
            ) % 7
            if 6 - last_rel_dow >= self._minimum_days:
                last_doy -= 7
            # The weekday argument is the relative weekday, one-based.
            last_week = week_number(
                last_doy, last_doy, last_rel_dow + 1, self._first_weekday, self._minimum_days
            )
            week = (week + last_week - 1) % last_week + 1
        return week, year_woy

    # ── rebuilding instants ──────────────────────────────────────────────

    def _at_day(self, local: LocalDate, days: int) -> float:
        """Same wall-clock time on another local day."""
        return self._cv.to_absolute(days * SECONDS_PER_DAY + local.seconds)

    def _at_month(self, local: LocalDate, year: int, month: int) -> float:
        """Same day of month (pinned to the month's length) in another month."""
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        day = min(local.day, days_in_month(year, month))
        return self._at_day(local, days_from_civil(year, month, day))

    def _at_week(self, local: LocalDate, year_woy: int, week: int) -> float:
        """Same weekday in a given week of a week-numbering year."""
        start = self._cv.first_week_start(days_from_civil(year_woy, 1, 1))
        days = start + (week - 1) * 7 + self._cv.relative_weekday(local.weekday)
        return self._at_day(local, days)

    def __repr__(self) -> str:
        return f"FieldArithmetic(converter={self._cv!r})"


def _roll_era_year(extended_year: int, amount: int) -> int:
    """Roll a year within its era; eras are unbounded so the year pins at 1."""
    if extended_year >= 1:
        return max(extended_year + amount, 1)
    era_year = max((1 - extended_year) - amount, 1)
    return 1 - era_year
