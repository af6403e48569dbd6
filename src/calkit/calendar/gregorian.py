from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Union

from calkit.timezone import RepeatedTimePolicy, TimeZoneRules

from .arithmetic import FieldArithmetic
from .components import DateComponents
from .config import CalendarConfiguration
from .converter import NANOSECONDS_PER_SECOND, FieldConverter
from .ordinality import OrdinalityEngine
from .truncation import UnitTruncator
from .units import CalendarUnit


class GregorianCalendar:
    """
    Proleptic Gregorian calendar bound to one configuration.

    Instants are float seconds since 1970-01-01T00:00:00Z.  The calendar
    holds no mutable state after construction and may be shared freely
    across threads.
    """

    def __init__(self, config: Optional[CalendarConfiguration] = None) -> None:
        if config is None:
            config = CalendarConfiguration()
        self._config = config
        self._converter = FieldConverter(config)
        self._arithmetic = FieldArithmetic(self._converter)
        self._ordinality = OrdinalityEngine(self._converter)
        self._truncator = UnitTruncator(self._converter)

    @classmethod
    def with_zone(
        cls,
        time_zone: TimeZoneRules,
        first_weekday: int = 1,
        minimum_days_in_first_week: int = 1,
    ) -> "GregorianCalendar":
        return cls(CalendarConfiguration(first_weekday, minimum_days_in_first_week, time_zone))

    # ── properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> CalendarConfiguration:
        return self._config

    @property
    def time_zone(self) -> TimeZoneRules:
        return self._config.time_zone

    @property
    def first_weekday(self) -> int:
        return self._config.first_weekday

    @property
    def minimum_days_in_first_week(self) -> int:
        return self._config.minimum_days_in_first_week

    # ── conversion ───────────────────────────────────────────────────────

    def components(self, units: Iterable[CalendarUnit], at: float) -> DateComponents:
        return self._converter.components(units, at)

    def component(self, unit: CalendarUnit, at: float) -> int:
        return self._converter.components((unit,), at).value(unit)

    def date_from(
        self,
        components: DateComponents,
        repeated: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
        skipped: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
    ) -> Optional[float]:
        """Instant for `components`, or None if they do not pin down a date."""
        return self._converter.date_from(components, repeated, skipped)

    def is_valid_date(self, components: DateComponents) -> bool:
        """
        True when every present field is in range and the fields agree with
        each other, i.e. converting to an instant and back reproduces them.
        The nanosecond is only range-checked; instants do not carry it.
        """
        nanosecond = components.nanosecond
        if nanosecond is not None and not 0 <= nanosecond < NANOSECONDS_PER_SECOND:
            return False
        fields = replace(components, nanosecond=None)
        at = self._converter.date_from(fields)
        if at is None:
            return False
        actual = self._converter.components(fields.units(), at)
        return all(actual.value(unit) == value for unit, value in fields.items())


    # ── arithmetic ───────────────────────────────────────────────────────

    def add(
        self,
        amounts: Union[DateComponents, CalendarUnit],
        at: float,
        value: Optional[int] = None,
        *,
        wrap: bool = False,
    ) -> float:
        """
        Add calendar amounts to an instant.

        Either pass a DateComponents of amounts, or a unit and a value::

            cal.add(DateComponents(month=-1, day=30), t)
            cal.add(CalendarUnit.DAY, t, 3, wrap=True)
        """
        if isinstance(amounts, CalendarUnit):
            if value is None:
                raise TypeError("add() with a unit needs a value")
            return self._arithmetic.add_unit(amounts, value, at, wrap)
        if value is not None:
            raise TypeError("add() with DateComponents takes no value")
        return self._arithmetic.add(amounts, at, wrap)

    # ── ordinality and truncation ────────────────────────────────────────

    def ordinality(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[int]:
        return self._ordinality.ordinality(small, large, at)

    def start_of(self, unit: CalendarUnit, at: float) -> Optional[float]:
        return self._truncator.start_of(unit, at)

    def date_interval(self, unit: CalendarUnit, at: float) -> Optional[tuple[float, float]]:
        return self._truncator.date_interval(unit, at)

    # ── field ranges ─────────────────────────────────────────────────────

    def minimum_range(self, unit: CalendarUnit) -> range:
        return self._truncator.minimum_range(unit)

    def maximum_range(self, unit: CalendarUnit) -> range:
        return self._truncator.maximum_range(unit)

    def range_of(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[range]:
        return self._truncator.range_of(small, large, at)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GregorianCalendar):
            return NotImplemented
        return self._config == other._config

    def __hash__(self) -> int:
        return hash(self._config)

    def __repr__(self) -> str:
        return (
            f"GregorianCalendar(time_zone={self.time_zone.identifier!r}, "
            f"first_weekday={self.first_weekday}, "
            f"minimum_days_in_first_week={self.minimum_days_in_first_week})"
        )
