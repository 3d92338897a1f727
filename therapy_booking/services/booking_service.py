from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.core.config import settings
from therapy_booking.models.user import TherapistPublic
from therapy_booking.scheduling.timeutils import get_timezone
from therapy_booking.scheduling.types import BookedSession, BookingRequest, Override, ValidationResult
from therapy_booking.scheduling.validation import BookingValidator
from therapy_booking.services.schedule_service import get_override, load_weekly_schedule
from therapy_booking.services.session_service import list_booked_sessions
from therapy_booking.services.therapist_service import count_available_credits, get_bookable_therapist


class DbTherapistDirectory:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_bookable_therapist(self, therapist_id: str) -> TherapistPublic | None:
        return await get_bookable_therapist(self.session, therapist_id)


class DbSessionSource:
    def __init__(self, session: AsyncSession, timezone: str) -> None:
        self.session = session
        self.tz = get_timezone(timezone)

    async def list_sessions(self, therapist_id: str, start: datetime, end: datetime) -> list[BookedSession]:
        return await list_booked_sessions(
            self.session, therapist_id, start, end, settings.blocking_statuses, self.tz
        )


class DbOverrideSource:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_override(self, therapist_id: str, target_date: date) -> Override | None:
        return await get_override(self.session, therapist_id, target_date)


class DbCreditLedger:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def available_credits(self, user_id: str) -> int:
        return await count_available_credits(self.session, user_id)


async def build_validator(session: AsyncSession, therapist_id: str) -> BookingValidator:
    schedule = await load_weekly_schedule(session, therapist_id)
    advance_days = min(schedule.session_settings.advance_booking_days, settings.advance_booking_days)
    return BookingValidator(
        DbTherapistDirectory(session),
        DbSessionSource(session, schedule.timezone),
        DbCreditLedger(session),
        DbOverrideSource(session),
        timezone=schedule.timezone,
        buffer_minutes=settings.booking_buffer_minutes,
        advance_booking_days=advance_days,
        blocking_statuses=settings.blocking_statuses,
        purchase_path=settings.credits_purchase_path,
    )


async def validate_booking(session: AsyncSession, request: BookingRequest, now: datetime) -> ValidationResult:
    """
    Validate a booking request against current data.

    Committing the session and using the credit is done elsewhere, atomically;
    a commit rejected after this check passed must be reported as a conflict.
    """
    validator = await build_validator(session, request.therapist_id)
    return await validator.validate(request, now)
