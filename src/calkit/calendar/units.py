from __future__ import annotations

from enum import Enum


class CalendarUnit(str, Enum):
    """Calendar fields, also used as units for arithmetic and ordinality."""

    ERA = "era"
    YEAR = "year"
    YEAR_FOR_WEEK_OF_YEAR = "year_for_week_of_year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK_OF_MONTH = "week_of_month"
    WEEK_OF_YEAR = "week_of_year"
    DAY = "day"
    WEEKDAY = "weekday"
    WEEKDAY_ORDINAL = "weekday_ordinal"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    NANOSECOND = "nanosecond"

    @property
    def is_time_of_day(self) -> bool:
        return self in _TIME_OF_DAY

    def is_within(self, larger: "CalendarUnit") -> bool:
        """True when this unit is strictly contained in `larger`."""
        return larger in CONTAINERS[self]


U = CalendarUnit

_TIME_OF_DAY = frozenset({U.HOUR, U.MINUTE, U.SECOND, U.NANOSECOND})

_DATE_CONTAINERS = frozenset({U.MONTH, U.QUARTER, U.YEAR, U.ERA})
_DAY_CONTAINERS = _DATE_CONTAINERS | {U.WEEK_OF_MONTH, U.WEEK_OF_YEAR}
_HOUR_CONTAINERS = _DAY_CONTAINERS | {U.DAY, U.WEEKDAY}

# Strict containment: small unit -> units that enclose it.
CONTAINERS: dict[CalendarUnit, frozenset[CalendarUnit]] = {
    U.ERA: frozenset(),
    U.YEAR: frozenset({U.ERA}),
    U.YEAR_FOR_WEEK_OF_YEAR: frozenset({U.ERA}),
    U.QUARTER: frozenset({U.YEAR, U.ERA}),
    U.MONTH: frozenset({U.QUARTER, U.YEAR, U.ERA}),
    U.WEEK_OF_MONTH: _DATE_CONTAINERS,
    U.WEEK_OF_YEAR: frozenset({U.QUARTER, U.YEAR, U.ERA}),
    U.DAY: _DAY_CONTAINERS,
    U.WEEKDAY: _DAY_CONTAINERS,
    U.WEEKDAY_ORDINAL: _DATE_CONTAINERS,
    U.HOUR: _HOUR_CONTAINERS,
    U.MINUTE: _HOUR_CONTAINERS | {U.HOUR},
    U.SECOND: _HOUR_CONTAINERS | {U.HOUR, U.MINUTE},
    U.NANOSECOND: _HOUR_CONTAINERS | {U.HOUR, U.MINUTE, U.SECOND},
}

# Order in which the fields of a composite addition are applied.
ADD_ORDER: tuple[CalendarUnit, ...] = (
    U.ERA,
    U.YEAR,
    U.YEAR_FOR_WEEK_OF_YEAR,
    U.QUARTER,
    U.MONTH,
    U.DAY,
    U.WEEK_OF_YEAR,
    U.WEEK_OF_MONTH,
    U.WEEKDAY,
    U.WEEKDAY_ORDINAL,
    U.HOUR,
    U.MINUTE,
    U.SECOND,
    U.NANOSECOND,
)

ALL_UNITS: frozenset[CalendarUnit] = frozenset(CalendarUnit)
