from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterator, Optional

from .units import CalendarUnit


@dataclass
class DateComponents:
    """
    Sparse calendar fields.

    Every field is optional; ``None`` means absent, so a zero is always a
    real value.  The same record is used as conversion output, as input to
    ``date_from`` and as the amounts of a composite addition.
    """

    era: Optional[int] = None
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    nanosecond: Optional[int] = None
    weekday: Optional[int] = None
    weekday_ordinal: Optional[int] = None
    quarter: Optional[int] = None
    week_of_month: Optional[int] = None
    week_of_year: Optional[int] = None
    year_for_week_of_year: Optional[int] = None
    is_leap_month: bool = False

    @classmethod
    def of(cls, unit: CalendarUnit, value: int) -> "DateComponents":
        """A record holding a single field."""
        return cls(**{unit.value: value})

    def is_set(self, unit: CalendarUnit) -> bool:
        return getattr(self, unit.value) is not None

    def value(self, unit: CalendarUnit) -> Optional[int]:
        return getattr(self, unit.value)

    def set_value(self, unit: CalendarUnit, value: Optional[int]) -> None:
        setattr(self, unit.value, value)

    def units(self) -> set[CalendarUnit]:
        """Units whose field is present."""
        return {unit for unit in CalendarUnit if self.is_set(unit)}

    def items(self) -> Iterator[tuple[CalendarUnit, int]]:
        for unit in CalendarUnit:
            value = self.value(unit)
            if value is not None:
                yield unit, value

    def is_valid_date(self, calendar) -> bool:
        return calendar.is_valid_date(self)

    def __repr__(self) -> str:
        present = ", ".join(
            f"{f.name}={getattr(self, f.name)}"
            for f in fields(self)
            if f.name != "is_leap_month" and getattr(self, f.name) is not None
        )
        return f"DateComponents({present})"
