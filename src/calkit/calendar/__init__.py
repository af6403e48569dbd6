"""
calkit.calendar
~~~~~~~~~~~~~~~

Proleptic Gregorian calendar arithmetic over float seconds since the Unix
epoch.  A GregorianCalendar converts instants to calendar fields and back,
adds calendar amounts (wrapping or carrying), reports the ordinal position of
one unit inside another, and truncates instants to the start of a unit.

Basic usage::

    from calkit.calendar import CalendarUnit as U, DateComponents, GregorianCalendar
    from calkit.timezone import time_zone_for

    cal = GregorianCalendar.with_zone(time_zone_for("America/Los_Angeles"))
    t = cal.date_from(DateComponents(year=2023, month=10, day=16))   # → 1697439600.0
    cal.add(U.MONTH, t, 3)                                            # 2024-01-16 00:00 PST
    cal.ordinality(U.DAY, U.YEAR, t)                                  # → 289
    cal.start_of(U.MONTH, t)                                          # 2023-10-01 00:00 PDT

Day arithmetic works on NumPy arrays as well as scalars::

    import numpy as np
    from calkit.calendar import days_from_civil
    days_from_civil(np.array([1970, 2000]), 1, 1)                     # → array([0, 10957])

Public API
----------
GregorianCalendar           The calendar facade.
CalendarSystem              Protocol the facade implements.
CalendarConfiguration       First weekday, minimum days in first week, time zone.
CalendarDefaults            Environment-backed fallback configuration.
load_calendar_defaults      Read CalendarDefaults from the environment.
CalendarUnit                Calendar fields, used as units.
DateComponents              Sparse calendar fields.
days_from_civil             (year, month, day) → day number.
civil_from_days             Day number → (year, month, day).
CalendarError               Base exception for calendar errors.
CalendarConfigurationError  Invalid configuration.
"""

from __future__ import annotations

from calkit.calendar._exceptions import CalendarConfigurationError, CalendarError
from calkit.calendar.components import DateComponents
from calkit.calendar.config import (
    CalendarConfiguration,
    CalendarDefaults,
    load_calendar_defaults,
)
from calkit.calendar.days import civil_from_days, days_from_civil
from calkit.calendar.gregorian import GregorianCalendar
from calkit.calendar.protocol import CalendarSystem
from calkit.calendar.units import CalendarUnit

__all__ = [
    "CalendarConfiguration",
    "CalendarConfigurationError",
    "CalendarDefaults",
    "CalendarError",
    "CalendarSystem",
    "CalendarUnit",
    "DateComponents",
    "GregorianCalendar",
    "civil_from_days",
    "days_from_civil",
    "load_calendar_defaults",
]
