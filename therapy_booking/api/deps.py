from datetime import UTC, datetime

from therapy_booking.core.db import get_session

__all__ = ["get_now", "get_session"]


def get_now() -> datetime:
    """Current instant for booking-window checks; override in tests instead of shifting the clock."""
    return datetime.now(UTC)
