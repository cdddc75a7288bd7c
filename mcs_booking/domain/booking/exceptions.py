"""
Booking domain errors.
Raised by the service and repository layers and rendered as {"error": message} by main.py.
"""


class BookingError(Exception):
    """Base class for all booking errors."""

    code = "booking_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldError(BookingError):
    """Raised when a required field (serviceId, name, start, date) is absent."""

    code = "missing_field"

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"Missing {field}")
        self.field = field


class InvalidServiceError(BookingError):
    """Raised when the service identifier is not in the catalog."""

    code = "invalid_service"

    def __init__(self, message: str = "Invalid serviceId"):
        super().__init__(message)


class InvalidTimeError(BookingError):
    code = "invalid_time"

    def __init__(self, message: str = "Invalid start time"):
        super().__init__(message)


class InvalidDateError(BookingError):
    code = "invalid_date"

    def __init__(self, message: str = "Invalid date format. Expected YYYY-MM-DD"):
        super().__init__(message)


class SlotFullError(BookingError):
    """Raised when the requested interval has already reached capacity."""

    code = "slot_full"
    status_code = 409

    def __init__(self, message: str = "Slot no longer available"):
        super().__init__(message)


class StorageError(BookingError):
    """Raised when the booking store cannot be read or written."""

    code = "storage_error"
    status_code = 500
