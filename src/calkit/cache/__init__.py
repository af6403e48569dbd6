"""
calkit.cache
~~~~~~~~~~~~

Process-wide sharing of calendars and time zones with explicit invalidation.

Basic usage::

    from calkit.cache import CalendarCache

    cache = CalendarCache(version_source=settings.version)
    cal = cache.fixed("Europe/Amsterdam", first_weekday=2, minimum_days_in_first_week=4)
    cache.fixed("Europe/Amsterdam", 2, 4) is cal     # → True until settings change
    live = cache.autoupdating_current()               # follows settings changes
    cache.reset()                                     # drop everything now

Public API
----------
CalendarCache         Lock-guarded cache keyed by zone and week rules.
AutoupdatingCalendar  Proxy that always resolves to the current calendar.
"""

from __future__ import annotations

from calkit.cache.cache import AutoupdatingCalendar, CalendarCache

__all__ = [
    "AutoupdatingCalendar",
    "CalendarCache",
]
