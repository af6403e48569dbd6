"""
Time-zone rule sources.

A rule source answers three questions about an instant: the raw (standard)
UTC offset, the daylight-saving offset on top of it, and when the total
offset next changes.  It also maps a local wall-clock reading back to the
offset in force, choosing between the two candidate offsets of a repeated or
skipped reading according to a RepeatedTimePolicy.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Final, Optional, Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ._exceptions import TimeZoneError, UnknownTimeZoneError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY: Final[int] = 86400
MAX_OFFSET_SECONDS: Final[int] = 18 * 3600

# datetime covers 0001-01-01 .. 9999-12-31; keep two days of slack for offsets.
_MIN_LOOKUP: Final[int] = -62135596800 + 2 * SECONDS_PER_DAY
_MAX_LOOKUP: Final[int] = 253402300799 - 2 * SECONDS_PER_DAY

_UTC_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NAIVE_EPOCH: Final[datetime] = datetime(1970, 1, 1)

_TRANSITION_HORIZON: Final[float] = 2 * 366 * SECONDS_PER_DAY
_TRANSITION_STEP: Final[float] = 7 * SECONDS_PER_DAY

_FIXED_OFFSET_RE = re.compile(r"^(?:GMT|UTC)([+-])(\d{1,2})(?::?(\d{2}))?$")


class RepeatedTimePolicy(str, Enum):
    """Which candidate wins when a local reading is repeated or skipped."""

    FORMER = "former"
    LATTER = "latter"


@runtime_checkable
class TimeZoneRules(Protocol):
    """Rule source consumed by TimeBasis."""

    @property
    def identifier(self) -> str: ...

    def utc_offset(self, at: float) -> int: ...

    def raw_offset(self, at: float) -> int: ...

    def dst_offset(self, at: float) -> int: ...

    def offset_for_local(self, local_seconds: float, policy: RepeatedTimePolicy) -> int: ...

    def next_transition(self, after: float) -> Optional[float]: ...


# ── fixed offsets ────────────────────────────────────────────────────────────

class FixedOffsetZone:
    """A zone with a constant offset and no daylight saving."""

    def __init__(self, seconds: int, identifier: Optional[str] = None) -> None:
        seconds = int(seconds)
        if abs(seconds) > MAX_OFFSET_SECONDS:
            raise TimeZoneError(
                f"Offset must be within ±{MAX_OFFSET_SECONDS} seconds; got {seconds}."
            )
        self._seconds = seconds
        self._identifier = identifier or _fixed_identifier(seconds)

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def seconds(self) -> int:
        return self._seconds

    def utc_offset(self, at: float) -> int:
        return self._seconds

    def raw_offset(self, at: float) -> int:
        return self._seconds

    def dst_offset(self, at: float) -> int:
        return 0

    def offset_for_local(self, local_seconds: float, policy: RepeatedTimePolicy) -> int:
        return self._seconds

    def next_transition(self, after: float) -> Optional[float]:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedOffsetZone):
            return NotImplemented
        return self._seconds == other._seconds

    def __hash__(self) -> int:
        return hash(("fixed", self._seconds))

    def __repr__(self) -> str:
        return f"FixedOffsetZone(seconds={self._seconds}, identifier={self._identifier!r})"


def _fixed_identifier(seconds: int) -> str:
    if seconds == 0:
        return "GMT"
    sign = "+" if seconds > 0 else "-"
    hours, rem = divmod(abs(seconds), 3600)
    return f"GMT{sign}{hours:02d}{rem // 60:02d}"


# ── IANA zones ───────────────────────────────────────────────────────────────

class ZoneInfoRules:
    """IANA time-zone rules backed by :mod:`zoneinfo`."""

    def __init__(self, name: str) -> None:
        try:
            self._zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise UnknownTimeZoneError(f"Unknown time zone: {name!r}") from e
        self._name = name
        logger.debug("Loaded time zone rules for %s", name)

    @property
    def identifier(self) -> str:
        return self._name

    def _local(self, at: float) -> datetime:
        seconds = _clamp(math.floor(at))
        return (_UTC_EPOCH + timedelta(seconds=seconds)).astimezone(self._zone)

    def utc_offset(self, at: float) -> int:
        return int(self._local(at).utcoffset().total_seconds())

    def dst_offset(self, at: float) -> int:
        dst = self._local(at).dst()
        return int(dst.total_seconds()) if dst is not None else 0

    def raw_offset(self, at: float) -> int:
        local = self._local(at)
        dst = local.dst() or timedelta(0)
        return int((local.utcoffset() - dst).total_seconds())

    def offset_for_local(self, local_seconds: float, policy: RepeatedTimePolicy) -> int:
        seconds = _clamp(math.floor(local_seconds))
        wall = (_NAIVE_EPOCH + timedelta(seconds=seconds)).replace(
            tzinfo=self._zone,
            fold=0 if policy is RepeatedTimePolicy.FORMER else 1,
        )
        return int(wall.utcoffset().total_seconds())

    def next_transition(
        self, after: float, horizon: float = _TRANSITION_HORIZON
    ) -> Optional[float]:
        """
        First instant strictly after `after` at which the UTC offset changes.

        Probes forward in weekly steps up to `horizon` seconds and bisects the
        bracketing step to the exact second; None when no change is found.
        """
        start = float(math.floor(after))
        offset = self.utc_offset(start)
        limit = start + horizon
        lo = start
        while lo < limit:
            hi = min(lo + _TRANSITION_STEP, limit)
            if self.utc_offset(hi) != offset:
                a, b = int(lo), int(hi)
                while b - a > 1:
                    mid = (a + b) // 2
                    if self.utc_offset(mid) == offset:
                        a = mid
                    else:
                        b = mid
                return float(b)
            lo = hi
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZoneInfoRules):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(("zoneinfo", self._name))

    def __repr__(self) -> str:
        return f"ZoneInfoRules({self._name!r})"


def _clamp(seconds: int) -> int:
    if seconds < _MIN_LOOKUP or seconds > _MAX_LOOKUP:
        logger.debug("Zone lookup at %d clamped to the datetime range", seconds)
        return min(max(seconds, _MIN_LOOKUP), _MAX_LOOKUP)
    return seconds


# ── factory ──────────────────────────────────────────────────────────────────

def time_zone_for(identifier: str) -> TimeZoneRules:
    """
    Build rules from an identifier.

    Accepts ``"UTC"``/``"GMT"``, fixed offsets such as ``"GMT+01:00"``,
    ``"UTC-8"`` or ``"GMT+0530"``, and IANA names such as
    ``"America/Los_Angeles"``.
    """
    if identifier in ("UTC", "GMT"):
        return FixedOffsetZone(0, identifier)

    match = _FIXED_OFFSET_RE.match(identifier)
    if match:
        sign, hours, minutes = match.groups()
        seconds = int(hours) * 3600 + int(minutes or 0) * 60
        return FixedOffsetZone(-seconds if sign == "-" else seconds, identifier)

    return ZoneInfoRules(identifier)
