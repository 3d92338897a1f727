"""
Booking validation

Re-checks a requested booking right before an external committer persists it.
The validator only reads through its collaborators; it never writes, so it can
be called any number of times for the same request. Passing validation is not
a reservation: two concurrent requests can both pass, and the committer must
serialize the actual insert.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Protocol

from therapy_booking.core.errors import (
    ConflictError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)

from .conflicts import find_conflicts
from .overrides import is_date_blocked
from .timeutils import get_timezone, parse_date, parse_time, to_local_naive
from .types import DEFAULT_BLOCKING_STATUSES, BookedSession, BookingRequest, Override, ValidationResult

logger = logging.getLogger(__name__)


class TherapistDirectory(Protocol):
    async def get_bookable_therapist(self, therapist_id: str) -> Any | None:
        """Return the therapist only if active, verified and profile-approved."""


class SessionSource(Protocol):
    async def list_sessions(self, therapist_id: str, start: datetime, end: datetime) -> list[BookedSession]: ...


class OverrideSource(Protocol):
    async def get_override(self, therapist_id: str, target_date: date) -> Override | None: ...


class CreditLedger(Protocol):
    async def available_credits(self, user_id: str) -> int: ...


class BookingValidator:
    def __init__(
        self,
        therapists: TherapistDirectory,
        sessions: SessionSource,
        credits: CreditLedger | None = None,
        overrides: OverrideSource | None = None,
        *,
        timezone: str = "UTC",
        buffer_minutes: int = 30,
        advance_booking_days: int | None = None,
        blocking_statuses: frozenset[str] = DEFAULT_BLOCKING_STATUSES,
        purchase_path: str | None = None,
    ) -> None:
        self.therapists = therapists
        self.sessions = sessions
        self.credits = credits
        self.overrides = overrides
        self.timezone = timezone
        self.buffer_minutes = buffer_minutes
        self.advance_booking_days = advance_booking_days
        self.blocking_statuses = blocking_statuses
        self.purchase_path = purchase_path

    async def validate(self, request: BookingRequest, now: datetime) -> ValidationResult:
        """
        Run every check in order and stop at the first failure.

        Args:
            request: the booking being attempted; date and time are wall-clock
                values in the therapist's timezone
            now: current instant; naive values are taken as therapist-local

        Returns:
            ValidationResult describing the validated window

        Raises:
            ValidationError: malformed date/time/duration, past date, same-day
                start inside the buffer, or date beyond the booking horizon
            NotFoundError: therapist missing, inactive, unverified or unapproved
            ConflictError: date blocked by an override or window overlaps a
                blocking session
            PaymentRequiredError: the client has no unused session credit
        """
        tz = get_timezone(self.timezone)
        session_date, start = self._parse(request)
        end = start + timedelta(minutes=request.duration_minutes)

        self._check_future(session_date, start, to_local_naive(now, tz))

        therapist = await self.therapists.get_bookable_therapist(request.therapist_id)
        if therapist is None:
            raise NotFoundError("Therapist not found or not available")

        if self.overrides is not None:
            override = await self.overrides.get_override(request.therapist_id, session_date)
            if is_date_blocked(override, session_date):
                raise ConflictError(
                    "Therapist is unavailable on this date",
                    reason=override.reason,
                )

        booked = await self.sessions.list_sessions(request.therapist_id, start, end)
        conflicts = find_conflicts(start, end, booked, blocking_statuses=self.blocking_statuses, tz=tz)
        if conflicts:
            logger.info(
                "Booking conflict for therapist %s at %s: %d overlapping session(s)",
                request.therapist_id,
                start.isoformat(),
                len(conflicts),
            )
            raise ConflictError(
                "This time slot is no longer available",
                conflicts=[
                    {
                        "id": c.id,
                        "start_time": to_local_naive(c.start, tz).isoformat(),
                        "end_time": to_local_naive(c.end, tz).isoformat(),
                        "status": c.status,
                    }
                    for c in conflicts
                ],
            )

        available_credits = None
        if self.credits is not None and request.user_id:
            available_credits = await self.credits.available_credits(request.user_id)
            if available_credits <= 0:
                raise PaymentRequiredError(
                    "No session credits available. Please purchase a package to book sessions.",
                    redirect_to=self.purchase_path,
                )

        return ValidationResult(
            therapist_id=request.therapist_id,
            session_date=session_date,
            start=start,
            end=end,
            duration_minutes=request.duration_minutes,
            available_credits=available_credits,
        )

    def _parse(self, request: BookingRequest) -> tuple[date, datetime]:
        try:
            session_date = parse_date(request.session_date)
            start_time = parse_time(request.start_time)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if request.duration_minutes is None or request.duration_minutes <= 0:
            raise ValidationError("Session duration must be greater than 0")
        return session_date, datetime.combine(session_date, start_time)

    def _check_future(self, session_date: date, start: datetime, now_local: datetime) -> None:
        today = now_local.date()
        if session_date < today:
            raise ValidationError("Cannot book sessions in the past")
        if session_date == today and start < now_local + timedelta(minutes=self.buffer_minutes):
            raise ValidationError(
                f"Sessions must be booked at least {self.buffer_minutes} minutes in advance"
            )
        if self.advance_booking_days is not None and session_date > today + timedelta(days=self.advance_booking_days):
            raise ValidationError(
                f"Sessions can only be booked up to {self.advance_booking_days} days in advance"
            )
