"""Clock interface - port abstracting the system time."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    Port for the system time.

    Every lifecycle rule (cancellation window, overdue sweep, points expiry)
    reads the time through this port so tests can pin it.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Current date/time.

        Returns:
            timezone-aware UTC datetime.
        """
        raise NotImplementedError


class SystemClock(Clock):
    """Real implementation backed by the system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Fake implementation for tests.

    Returns a fixed instant that tests move explicitly.
    """

    def __init__(self, fixed_time: datetime | None = None):
        fixed = fixed_time or datetime.now(timezone.utc)
        if fixed.tzinfo is None:
            fixed = fixed.replace(tzinfo=timezone.utc)
        self._fixed_time = fixed

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        if new_time.tzinfo is None:
            new_time = new_time.replace(tzinfo=timezone.utc)
        self._fixed_time = new_time

    def advance(self, seconds: int = 0, minutes: int = 0, hours: int = 0, days: int = 0) -> None:
        """
        Moves the fixed time forward.

        Args:
            seconds: Seconds to advance.
            minutes: Minutes to advance.
            hours: Hours to advance.
            days: Days to advance.
        """
        delta = timedelta(seconds=seconds, minutes=minutes, hours=hours, days=days)
        self._fixed_time = self._fixed_time + delta
