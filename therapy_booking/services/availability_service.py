import logging
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.core.config import settings
from therapy_booking.scheduling.availability import (
    drop_started_slots,
    slots_for_date,
    slots_for_range,
    suggest_alternatives,
)
from therapy_booking.scheduling.conflicts import find_conflicts
from therapy_booking.scheduling.timeutils import get_timezone, to_local_naive
from therapy_booking.scheduling.types import CandidateSlot, SlotMode
from therapy_booking.services.schedule_service import list_overrides, load_weekly_schedule
from therapy_booking.services.session_service import list_booked_sessions

logger = logging.getLogger(__name__)


async def get_slots_for_date(
    session: AsyncSession,
    therapist_id: str,
    target_date: date,
    mode: SlotMode = "available",
    now: datetime | None = None,
) -> list[CandidateSlot]:
    """Slots for one date. When `now` is given, slots starting inside the booking buffer are dropped."""
    schedule = await load_weekly_schedule(session, therapist_id)
    tz = get_timezone(schedule.timezone)
    overrides = await list_overrides(session, therapist_id, target_date, target_date)
    day_start = datetime.combine(target_date, time.min)
    booked = await list_booked_sessions(
        session,
        therapist_id,
        day_start,
        day_start + timedelta(days=1),
        settings.blocking_statuses,
        tz,
    )
    slots = slots_for_date(
        schedule, target_date, overrides, booked, mode, blocking_statuses=settings.blocking_statuses
    )
    if now is not None:
        slots = drop_started_slots(slots, now, settings.booking_buffer_minutes, schedule.timezone)
    logger.debug(
        "Therapist %s on %s: %d slot(s) (%d override, %d booked)",
        therapist_id,
        target_date.isoformat(),
        len(slots),
        sum(1 for s in slots if s.is_override),
        sum(1 for s in slots if s.booking_status == "booked"),
    )
    return slots


async def get_slots_for_range(
    session: AsyncSession,
    therapist_id: str,
    start_date: date | None,
    days: int,
    mode: SlotMode = "all",
    now: datetime | None = None,
) -> tuple[date, list[CandidateSlot]]:
    """
    Slots for `days` dates from start_date, never past the advance booking
    horizon counted from today.

    "Today" is the therapist's local date at `now`; it is also the first date
    when start_date is None. Returns the first date with the slots.
    """
    schedule = await load_weekly_schedule(session, therapist_id)
    tz = get_timezone(schedule.timezone)
    today = to_local_naive(now or datetime.now(UTC), tz).date()
    first_day = start_date or today

    horizon = min(schedule.session_settings.advance_booking_days, settings.advance_booking_days)
    end_date = min(first_day + timedelta(days=days - 1), today + timedelta(days=horizon))
    if days <= 0 or end_date < first_day:
        return first_day, []
    days = (end_date - first_day).days + 1

    overrides = await list_overrides(session, therapist_id, first_day, end_date)
    range_start = datetime.combine(first_day, time.min)
    booked = await list_booked_sessions(
        session,
        therapist_id,
        range_start,
        range_start + timedelta(days=days),
        settings.blocking_statuses,
        tz,
    )
    slots = slots_for_range(
        schedule, first_day, days, overrides, booked, mode, blocking_statuses=settings.blocking_statuses
    )
    if now is not None:
        slots = drop_started_slots(slots, now, settings.booking_buffer_minutes, schedule.timezone)
    return first_day, slots


async def check_window(
    session: AsyncSession,
    therapist_id: str,
    start: datetime,
    duration_minutes: int,
    exclude_session_id: str | None = None,
) -> dict:
    """
    Check one window against booked sessions and suggest nearby free times.

    Returns:
        dict: {
            "available": bool,
            "conflicting_sessions": [BookedSession, ...],
            "suggested_times": [{"time": datetime, "label": str}, ...]
        }
    """
    schedule = await load_weekly_schedule(session, therapist_id)
    tz = get_timezone(schedule.timezone)
    local_start = to_local_naive(start, tz)
    local_end = local_start + timedelta(minutes=duration_minutes)

    # Wide enough to also cover the "same time tomorrow" suggestion
    booked = await list_booked_sessions(
        session,
        therapist_id,
        local_start,
        local_end + timedelta(days=1),
        settings.blocking_statuses,
        tz,
        exclude_session_id=exclude_session_id,
    )
    conflicts = find_conflicts(
        local_start,
        local_end,
        booked,
        blocking_statuses=settings.blocking_statuses,
        tz=tz,
        exclude_session_id=exclude_session_id,
    )
    suggestions = []
    if conflicts:
        suggestions = suggest_alternatives(
            local_start,
            duration_minutes,
            booked,
            timezone=schedule.timezone,
            blocking_statuses=settings.blocking_statuses,
            exclude_session_id=exclude_session_id,
        )
    logger.info(
        "Availability check for therapist %s at %s (%d min): %d conflict(s)",
        therapist_id,
        local_start.isoformat(),
        duration_minutes,
        len(conflicts),
    )
    return {
        "available": not conflicts,
        "conflicting_sessions": conflicts,
        "suggested_times": suggestions,
    }
