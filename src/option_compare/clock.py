"""
Clock interface for project timestamps
"""

from datetime import datetime, timezone, timedelta
from typing import Protocol, Optional


class Clock(Protocol):
    """Clock interface for deterministic time handling"""

    def now(self) -> datetime:
        """Get current UTC time"""
        ...


class SystemClock:
    """System clock implementation"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Fixed clock for deterministic testing"""

    def __init__(self, start_time: Optional[datetime] = None):
        if start_time is None:
            start_time = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        self._current_time = start_time

    def now(self) -> datetime:
        return self._current_time

    def advance(self, seconds: float) -> None:
        """Advance time by specified seconds"""
        self._current_time += timedelta(seconds=seconds)

    def set_time(self, new_time: datetime) -> None:
        """Set the clock to a specific time"""
        self._current_time = new_time.replace(tzinfo=timezone.utc)


def iso_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC string with millisecond precision

    Naive datetimes are treated as UTC. Output matches the browser's
    Date.toISOString(), e.g. 2024-01-01T00:00:00.000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
