class TimeZoneError(Exception):
    """Base exception for time-zone rule errors."""


class UnknownTimeZoneError(TimeZoneError, KeyError):
    """Raised when an identifier does not name a known time zone."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""
