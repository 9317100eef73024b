"""Value Object BookingNumber - human readable unique booking reference."""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime

from app.domain.constants import BOOKING_NUMBER_PREFIX


@dataclass(frozen=True)
class BookingNumber:
    """
    Immutable booking reference.

    Format: NOL-YYYYMMDD-XXXXXX, where XXXXXX is random uppercase alphanumeric.
    """

    value: str

    PREFIX = BOOKING_NUMBER_PREFIX
    SUFFIX_LENGTH = 6
    ALLOWED_CHARS = string.ascii_uppercase + string.digits

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("booking_number cannot be empty")

        if len(self.value) > 32:
            raise ValueError(f"booking_number exceeds 32 characters: {len(self.value)}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, issued_at: datetime) -> "BookingNumber":
        suffix = "".join(secrets.choice(cls.ALLOWED_CHARS) for _ in range(cls.SUFFIX_LENGTH))
        return cls(value=f"{cls.PREFIX}-{issued_at:%Y%m%d}-{suffix}")

    @classmethod
    def from_string(cls, value: str) -> "BookingNumber":
        return cls(value=value.upper().strip())
