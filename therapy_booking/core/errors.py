"""Typed booking errors.

Each error carries the HTTP status the API layer answers with, so route
handlers can let them propagate to the global exception handler.
"""
from typing import Any


class BookingError(Exception):
    status_code: int = 400
    error_type: str = "booking_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "error_type": self.error_type, **self.details}


class ValidationError(BookingError):
    """Malformed input, past dates, or a same-day time inside the booking buffer."""

    status_code = 400
    error_type = "validation_error"


class NotFoundError(BookingError):
    status_code = 404
    error_type = "not_found"


class ConflictError(BookingError):
    """The requested window overlaps a blocking session or a blocked date."""

    status_code = 409
    error_type = "conflict"

    def __init__(self, message: str, conflicts: list[dict[str, Any]] | None = None, **details: Any) -> None:
        super().__init__(message, conflicts=conflicts or [], **details)
        self.conflicts = conflicts or []


class PaymentRequiredError(BookingError):
    status_code = 402
    error_type = "payment_required"

    def __init__(self, message: str, redirect_to: str | None = None, **details: Any) -> None:
        super().__init__(message, redirect_to=redirect_to, **details)
        self.redirect_to = redirect_to
