"""Domain exceptions for the rental core."""


class DomainError(Exception):
    """Base class for every domain error."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Categories ===


class ValidationError(DomainError):
    """Malformed input."""

    def __init__(self, field: str, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(
            message=f"Validation failed on '{field}': {message}",
            code=code,
        )
        self.field = field


class NotFoundError(DomainError):
    """A referenced record does not exist."""


class ConflictError(DomainError):
    """The request conflicts with current state or a business rule."""


class ForbiddenError(DomainError):
    """The requester is not allowed to act on the record."""


class InvalidStateError(DomainError):
    """Illegal lifecycle transition."""


class InternalError(DomainError):
    """Unexpected infrastructure failure; message is deliberately generic."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"An unexpected error occurred while processing '{operation}'",
            code="INTERNAL_ERROR",
        )
        self.operation = operation


# === Validation ===


class InvalidDateRangeError(ValidationError):
    """end must come after start."""

    def __init__(self, message: str):
        super().__init__(field="end", message=message, code="INVALID_DATE_RANGE")


# === Not found ===


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: int):
        super().__init__(message=f"Booking not found: {booking_id}", code="BOOKING_NOT_FOUND")
        self.booking_id = booking_id


class VehicleNotFoundError(NotFoundError):
    def __init__(self, vehicle_id: int):
        super().__init__(message=f"Vehicle not found: {vehicle_id}", code="VEHICLE_NOT_FOUND")
        self.vehicle_id = vehicle_id


class LocationNotFoundError(NotFoundError):
    def __init__(self, location_id: int, role: str):
        super().__init__(
            message=f"{role.capitalize()} location not found: {location_id}",
            code=f"{role.upper()}_LOCATION_NOT_FOUND",
        )
        self.location_id = location_id
        self.role = role


class ExtraNotFoundError(NotFoundError):
    def __init__(self, extra_id: int):
        super().__init__(message=f"Extra not found: {extra_id}", code="EXTRA_NOT_FOUND")
        self.extra_id = extra_id


# === Conflicts ===


class VehicleUnavailableError(ConflictError):
    """The vehicle is flagged unavailable or already booked for the range."""

    def __init__(self, vehicle_id: int):
        super().__init__(
            message=f"Vehicle {vehicle_id} is not available for the selected dates",
            code="VEHICLE_UNAVAILABLE",
        )
        self.vehicle_id = vehicle_id


class LocationUnavailableError(ConflictError):
    def __init__(self, location_id: int, role: str):
        super().__init__(
            message=f"{role.capitalize()} location {location_id} is not active",
            code=f"{role.upper()}_LOCATION_UNAVAILABLE",
        )
        self.location_id = location_id
        self.role = role


class ExtraUnavailableError(ConflictError):
    def __init__(self, extra_id: int):
        super().__init__(message=f"Extra {extra_id} is not active", code="EXTRA_UNAVAILABLE")
        self.extra_id = extra_id


class MinimumRedemptionNotMetError(ConflictError):
    def __init__(self, requested: int, minimum: int):
        super().__init__(
            message=f"At least {minimum} points are required to redeem, got {requested}",
            code="MINIMUM_NOT_MET",
        )
        self.requested = requested
        self.minimum = minimum


class InsufficientBalanceError(ConflictError):
    def __init__(self, requested: int, available: int):
        super().__init__(
            message=f"Cannot redeem {requested} points: only {available} available",
            code="INSUFFICIENT_BALANCE",
        )
        self.requested = requested
        self.available = available


class DuplicateAwardError(ConflictError):
    """Storage rejected a second Earned transaction for the same (user, booking)."""

    def __init__(self, user_id: str, booking_id: int):
        super().__init__(
            message=f"Points already awarded to {user_id} for booking {booking_id}",
            code="ALREADY_AWARDED",
        )
        self.user_id = user_id
        self.booking_id = booking_id


class OptimisticLockError(ConflictError):
    """Concurrent update detected on a booking."""

    def __init__(self, booking_id: int, expected_version: int):
        super().__init__(
            message=f"Booking {booking_id} was modified concurrently "
            f"(expected version {expected_version})",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.booking_id = booking_id
        self.expected_version = expected_version


# === Authorization ===


class NotBookingOwnerError(ForbiddenError):
    def __init__(self, booking_id: int, requester_id: str):
        super().__init__(
            message=f"User {requester_id} does not own booking {booking_id}",
            code="NOT_BOOKING_OWNER",
        )
        self.booking_id = booking_id
        self.requester_id = requester_id


# === Lifecycle ===


class InvalidBookingStatusError(InvalidStateError):
    """The booking's current status does not allow the operation."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"Cannot {operation}: current status '{current_status}', expected '{expected}'",
            code="INVALID_BOOKING_STATUS",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class CancellationWindowClosedError(InvalidStateError):
    def __init__(self, booking_id: int):
        super().__init__(
            message=f"Booking {booking_id} can no longer be canceled: the rental has started",
            code="CANCELLATION_WINDOW_CLOSED",
        )
        self.booking_id = booking_id
