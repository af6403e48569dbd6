class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class CalendarConfigurationError(CalendarError, ValueError):
    """Raised when a calendar configuration value is outside its contract."""
