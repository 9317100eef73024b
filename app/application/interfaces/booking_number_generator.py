"""BookingNumberGenerator interface - port for booking reference generation."""

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.constants import BOOKING_NUMBER_PREFIX
from app.domain.value_objects.booking_number import BookingNumber


class BookingNumberGenerator(ABC):
    @abstractmethod
    def generate(self, issued_at: datetime) -> str:
        """
        Generates a booking number.

        Returns:
            String in NOL-YYYYMMDD-XXXXXX format.
        """
        raise NotImplementedError


class RealBookingNumberGenerator(BookingNumberGenerator):
    """Random suffix from a cryptographic source."""

    def generate(self, issued_at: datetime) -> str:
        return BookingNumber.generate(issued_at).value


class FakeBookingNumberGenerator(BookingNumberGenerator):
    """
    Fake implementation for tests.

    Yields predictable numbers: NOL-YYYYMMDD-000001, NOL-YYYYMMDD-000002, ...
    """

    def __init__(self) -> None:
        self._counter = 0
        self._next_number: str | None = None

    def generate(self, issued_at: datetime) -> str:
        if self._next_number:
            number, self._next_number = self._next_number, None
            return number
        self._counter += 1
        return f"{BOOKING_NUMBER_PREFIX}-{issued_at:%Y%m%d}-{self._counter:06d}"

    def set_next_number(self, number: str) -> None:
        self._next_number = number

    def reset(self) -> None:
        self._counter = 0
        self._next_number = None
