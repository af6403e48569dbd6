"""Calendar configuration and the environment-backed defaults provider.

Environment variables (read by ``load_calendar_defaults``):
    CALKIT_FIRST_WEEKDAY: first day of the week, 1 = Sunday .. 7 = Saturday (default: 1)
    CALKIT_MINIMUM_DAYS_IN_FIRST_WEEK: days the first week of a period needs (default: 1)
    CALKIT_TIME_ZONE: time-zone identifier (default: UTC)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final, Optional

from calkit.timezone import TimeZoneRules, time_zone_for

from ._exceptions import CalendarConfigurationError

ENV_FIRST_WEEKDAY: Final[str] = "CALKIT_FIRST_WEEKDAY"
ENV_MINIMUM_DAYS_IN_FIRST_WEEK: Final[str] = "CALKIT_MINIMUM_DAYS_IN_FIRST_WEEK"
ENV_TIME_ZONE: Final[str] = "CALKIT_TIME_ZONE"

DEFAULT_FIRST_WEEKDAY: Final[int] = 1
DEFAULT_MINIMUM_DAYS_IN_FIRST_WEEK: Final[int] = 1
DEFAULT_TIME_ZONE: Final[str] = "UTC"


def _check_weekday_range(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 7:
        raise CalendarConfigurationError(f"{name} must be an integer in 1..7, got {value!r}")


@dataclass(frozen=True)
class CalendarConfiguration:
    """Immutable calendar configuration.

    Attributes:
        first_weekday: First day of the week, 1 = Sunday .. 7 = Saturday.
        minimum_days_in_first_week: Days the first week of a month or year
            must contain to count as week 1.
        time_zone: Rule source for UTC and daylight-saving offsets.
    """

    first_weekday: int = DEFAULT_FIRST_WEEKDAY
    minimum_days_in_first_week: int = DEFAULT_MINIMUM_DAYS_IN_FIRST_WEEK
    time_zone: TimeZoneRules = field(default_factory=lambda: time_zone_for(DEFAULT_TIME_ZONE))

    def __post_init__(self) -> None:
        """Validate configuration values."""
        _check_weekday_range("first_weekday", self.first_weekday)
        _check_weekday_range("minimum_days_in_first_week", self.minimum_days_in_first_week)

    @classmethod
    def from_defaults(
        cls,
        defaults: Optional["CalendarDefaults"] = None,
        *,
        first_weekday: Optional[int] = None,
        minimum_days_in_first_week: Optional[int] = None,
        time_zone: Optional[TimeZoneRules] = None,
    ) -> "CalendarConfiguration":
        """Explicit values win; absent ones come from the defaults provider."""
        if defaults is None:
            defaults = load_calendar_defaults()
        return cls(
            first_weekday=first_weekday if first_weekday is not None else defaults.first_weekday,
            minimum_days_in_first_week=(
                minimum_days_in_first_week
                if minimum_days_in_first_week is not None
                else defaults.minimum_days_in_first_week
            ),
            time_zone=time_zone if time_zone is not None else time_zone_for(defaults.time_zone),
        )


@dataclass(frozen=True)
class CalendarDefaults:
    """Fallback week rules and zone, used only where explicit values are absent."""

    first_weekday: int = DEFAULT_FIRST_WEEKDAY
    minimum_days_in_first_week: int = DEFAULT_MINIMUM_DAYS_IN_FIRST_WEEK
    time_zone: str = DEFAULT_TIME_ZONE

    def __post_init__(self) -> None:
        _check_weekday_range(ENV_FIRST_WEEKDAY, self.first_weekday)
        _check_weekday_range(ENV_MINIMUM_DAYS_IN_FIRST_WEEK, self.minimum_days_in_first_week)
        if not self.time_zone:
            raise CalendarConfigurationError(f"{ENV_TIME_ZONE} must not be empty")


def _parse_weekday_int(env_var: str, default: int) -> int:
    """Parse an integer in 1..7 from an environment variable.

    Args:
        env_var: Environment variable name.
        default: Default value if env var is not set.

    Returns:
        Parsed integer.

    Raises:
        CalendarConfigurationError: If value is set but not an integer in 1..7.
    """
    raw = os.environ.get(env_var)
    if raw is None:
        return default

    raw = raw.strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise CalendarConfigurationError(f"{env_var} must be an integer in 1..7, got '{raw}'") from e

    if not 1 <= value <= 7:
        raise CalendarConfigurationError(f"{env_var} must be an integer in 1..7, got {value}")

    return value


def load_calendar_defaults() -> CalendarDefaults:
    """Load calendar defaults from environment variables.

    Returns:
        CalendarDefaults with validated values.

    Raises:
        CalendarConfigurationError: If any value is invalid.
    """
    first_weekday = _parse_weekday_int(ENV_FIRST_WEEKDAY, DEFAULT_FIRST_WEEKDAY)
    minimum_days = _parse_weekday_int(
        ENV_MINIMUM_DAYS_IN_FIRST_WEEK, DEFAULT_MINIMUM_DAYS_IN_FIRST_WEEK
    )
    time_zone = (os.environ.get(ENV_TIME_ZONE) or "").strip() or DEFAULT_TIME_ZONE

    return CalendarDefaults(
        first_weekday=first_weekday,
        minimum_days_in_first_week=minimum_days,
        time_zone=time_zone,
    )
