"""Value Object DateRange - the [start, end) span of a rental."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.domain.errors import InvalidDateRangeError


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class DateRange:
    """
    Immutable rental span.

    Attributes:
        start: Pickup date/time.
        end: Return date/time, strictly after start.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidDateRangeError(
                f"end must be after start: {self.start.isoformat()} >= {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def rental_days(self) -> int:
        """
        Number of billable days.

        Business rule: any started day counts as a full day.
        Example: 25 hours = 2 days.
        """
        total_hours = self.duration.total_seconds() / 3600
        days = int(total_hours // 24)
        if total_hours % 24 > 0:
            days += 1
        return max(1, days)

    def overlaps_inclusive(self, other: "DateRange") -> bool:
        """
        Boundary-inclusive overlap.

        Ranges that only touch at an endpoint are reported as overlapping, so a
        booking ending at D conflicts with one starting at D.
        """
        return other.start <= self.end and other.end >= self.start

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
