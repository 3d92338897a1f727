import logging
from datetime import date

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.core.config import settings
from therapy_booking.models.availability import AvailabilityOverride, AvailabilityTemplate, WeeklyScheduleRecord
from therapy_booking.scheduling.normalize import default_schedule, schedule_from_document, schedule_from_templates
from therapy_booking.scheduling.types import Override, WeeklySchedule

logger = logging.getLogger(__name__)


async def load_weekly_schedule(session: AsyncSession, therapist_id: str) -> WeeklySchedule:
    """
    Load a therapist's weekly schedule, preferring the weekly document over
    legacy template rows. Falls back to the default schedule when neither
    exists; unreadable data degrades to an empty schedule.
    """
    duration = settings.default_session_duration_minutes
    timezone = settings.default_timezone

    result = await session.execute(
        select(WeeklyScheduleRecord)
        .where(
            WeeklyScheduleRecord.therapist_id == therapist_id,
            WeeklyScheduleRecord.is_active == True,  # noqa: E712
        )
        .order_by(WeeklyScheduleRecord.updated_at.desc())
        .limit(1)
    )
    record = result.scalars().first()
    try:
        if record and record.weekly_availability:
            return schedule_from_document(record.weekly_availability, duration, timezone)

        result = await session.execute(
            select(AvailabilityTemplate)
            .where(
                AvailabilityTemplate.therapist_id == therapist_id,
                AvailabilityTemplate.is_active == True,  # noqa: E712
            )
            .order_by(AvailabilityTemplate.day_of_week, AvailabilityTemplate.start_time)
        )
        templates = list(result.scalars().all())
        if templates:
            return schedule_from_templates(templates, duration, timezone)
    except (SchemaValidationError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Unreadable availability for therapist %s, offering no slots: %s", therapist_id, e)
        return WeeklySchedule(timezone=timezone)

    logger.info("No availability stored for therapist %s, using default schedule", therapist_id)
    return default_schedule(duration, timezone)


def _to_override(row: AvailabilityOverride) -> Override:
    return Override(
        therapist_id=row.therapist_id,
        override_date=row.override_date,
        is_active=row.is_active,
        is_available=row.is_available,
        start_time=row.start_time,
        end_time=row.end_time,
        session_duration=row.session_duration,
        session_type=row.session_type,
        reason=row.reason,
    )


async def list_overrides(
    session: AsyncSession, therapist_id: str, start_date: date, end_date: date
) -> list[Override]:
    """Active overrides for start_date..end_date inclusive, oldest update first."""
    result = await session.execute(
        select(AvailabilityOverride)
        .where(
            AvailabilityOverride.therapist_id == therapist_id,
            AvailabilityOverride.is_active == True,  # noqa: E712
            AvailabilityOverride.override_date >= start_date,
            AvailabilityOverride.override_date <= end_date,
        )
        .order_by(AvailabilityOverride.override_date, AvailabilityOverride.updated_at)
    )
    return [_to_override(row) for row in result.scalars().all()]


async def get_override(session: AsyncSession, therapist_id: str, target_date: date) -> Override | None:
    overrides = await list_overrides(session, therapist_id, target_date, target_date)
    return overrides[-1] if overrides else None
