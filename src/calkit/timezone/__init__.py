"""
calkit.timezone
~~~~~~~~~~~~~~~

Time-zone rule sources and the TimeBasis that maps between absolute time and
local wall-clock seconds.

Basic usage::

    from calkit.timezone import TimeBasis, time_zone_for

    basis = TimeBasis(time_zone_for("America/Los_Angeles"))
    raw, dst = basis.offsets(1697439600.0)          # → (-28800, 3600)
    t = basis.to_absolute(local_seconds)             # folds/gaps → former

Fixed offsets never transition::

    from calkit.timezone import FixedOffsetZone
    utc_plus_one = FixedOffsetZone(3600)

Public API
----------
TimeZoneRules         Protocol for rule sources.
FixedOffsetZone       Constant-offset zone.
ZoneInfoRules         IANA zone backed by zoneinfo/tzdata.
time_zone_for         Build rules from an identifier.
TimeBasis             Offset lookup and local → absolute resolution.
RepeatedTimePolicy    FORMER / LATTER choice for folds and gaps.
TimeZoneError         Base exception for zone errors.
UnknownTimeZoneError  Unknown zone identifier.
"""

from __future__ import annotations

from calkit.timezone._exceptions import TimeZoneError, UnknownTimeZoneError
from calkit.timezone.basis import TimeBasis
from calkit.timezone.rules import (
    FixedOffsetZone,
    RepeatedTimePolicy,
    TimeZoneRules,
    ZoneInfoRules,
    time_zone_for,
)

__all__ = [
    "FixedOffsetZone",
    "RepeatedTimePolicy",
    "TimeBasis",
    "TimeZoneError",
    "TimeZoneRules",
    "UnknownTimeZoneError",
    "ZoneInfoRules",
    "time_zone_for",
]
