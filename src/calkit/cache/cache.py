from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional, Union

from calkit.calendar.components import DateComponents
from calkit.calendar.config import CalendarConfiguration, CalendarDefaults, load_calendar_defaults
from calkit.calendar.gregorian import GregorianCalendar
from calkit.calendar.units import CalendarUnit
from calkit.timezone import RepeatedTimePolicy, TimeZoneRules, time_zone_for

logger = logging.getLogger(__name__)

CalendarKey = tuple[str, int, int]


def _constant_version() -> int:
    return 0


class CalendarCache:
    """Shared GregorianCalendar and time-zone instances.

    Holds at most one calendar per (zone identifier, first weekday, minimum
    days in first week).  Every lookup first asks `version_source` for the
    current settings version; when it differs from the version the cache was
    built under, everything is dropped and rebuilt lazily.  Thread-safe for
    concurrent access.
    """

    def __init__(
        self,
        version_source: Optional[Callable[[], int]] = None,
        defaults_source: Optional[Callable[[], CalendarDefaults]] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            version_source: Zero-argument callable returning the settings
                version. If None, the version never changes.
            defaults_source: Callable returning fallback configuration.
                If None, defaults are loaded from the environment.
        """
        self._version_source = version_source or _constant_version
        self._defaults_source = defaults_source or load_calendar_defaults
        self._lock = threading.Lock()
        self._version = self._version_source()
        self._calendars: dict[CalendarKey, GregorianCalendar] = {}
        self._zones: dict[str, TimeZoneRules] = {}
        self._defaults: Optional[CalendarDefaults] = None
        self._autoupdating: Optional[AutoupdatingCalendar] = None

    # ── invalidation ─────────────────────────────────────────────────────

    def _refresh(self) -> None:
        """Drop cached state if the settings version moved. Caller holds the lock."""
        version = self._version_source()
        if version != self._version:
            logger.debug("Settings version %s -> %s, clearing calendar cache", self._version, version)
            self._version = version
            self._clear()

    def _clear(self) -> None:
        self._calendars.clear()
        self._zones.clear()
        self._defaults = None

    def reset(self) -> None:
        """Drop every cached calendar and zone."""
        with self._lock:
            logger.debug("Calendar cache reset")
            self._clear()

    # ── lookups ──────────────────────────────────────────────────────────

    def time_zone(self, identifier: str) -> TimeZoneRules:
        with self._lock:
            self._refresh()
            return self._zone(identifier)

    def _zone(self, identifier: str) -> TimeZoneRules:
        if identifier not in self._zones:
            logger.debug("Loading time zone %s", identifier)
            self._zones[identifier] = time_zone_for(identifier)
        return self._zones[identifier]

    def fixed(
        self,
        identifier: Optional[str] = None,
        first_weekday: Optional[int] = None,
        minimum_days_in_first_week: Optional[int] = None,
    ) -> GregorianCalendar:
        """Calendar for explicit settings; missing ones come from the defaults."""
        with self._lock:
            self._refresh()
            if self._defaults is None:
                self._defaults = self._defaults_source()
            defaults = self._defaults

            key = (
                identifier if identifier is not None else defaults.time_zone,
                first_weekday if first_weekday is not None else defaults.first_weekday,
                (
                    minimum_days_in_first_week
                    if minimum_days_in_first_week is not None
                    else defaults.minimum_days_in_first_week
                ),
            )
            if key not in self._calendars:
                logger.debug("Building calendar for %s", key)
                self._calendars[key] = GregorianCalendar(
                    CalendarConfiguration(key[1], key[2], self._zone(key[0]))
                )
            return self._calendars[key]

    def current(self) -> GregorianCalendar:
        """Calendar for the default settings."""
        return self.fixed()

    def autoupdating_current(self) -> AutoupdatingCalendar:
        """The one proxy that always resolves to the current calendar.

        It survives invalidation and `reset()`.
        """
        with self._lock:
            if self._autoupdating is None:
                self._autoupdating = AutoupdatingCalendar(self)
            return self._autoupdating

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._calendars)

    def __repr__(self) -> str:
        return f"CalendarCache(version={self._version}, calendars={len(self._calendars)})"


class AutoupdatingCalendar:
    """
    Stand-in for a cache's current calendar.

    Every call and attribute lookup goes through `CalendarCache.current()`,
    so the proxy follows settings changes and resets instead of pinning one
    instance.
    """

    def __init__(self, cache: CalendarCache) -> None:
        self._cache = cache

    @property
    def calendar(self) -> GregorianCalendar:
        return self._cache.current()

    def components(self, units: Iterable[CalendarUnit], at: float) -> DateComponents:
        return self.calendar.components(units, at)

    def date_from(
        self,
        components: DateComponents,
        repeated: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
        skipped: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
    ) -> Optional[float]:
        return self.calendar.date_from(components, repeated, skipped)

    def add(
        self,
        amounts: Union[DateComponents, CalendarUnit],
        at: float,
        value: Optional[int] = None,
        *,
        wrap: bool = False,
    ) -> float:
        return self.calendar.add(amounts, at, value, wrap=wrap)

    def ordinality(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[int]:
        return self.calendar.ordinality(small, large, at)

    def start_of(self, unit: CalendarUnit, at: float) -> Optional[float]:
        return self.calendar.start_of(unit, at)

    def range_of(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[range]:
        return self.calendar.range_of(small, large, at)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._cache.current(), name)

    def __repr__(self) -> str:
        return f"AutoupdatingCalendar({self._cache!r})"
