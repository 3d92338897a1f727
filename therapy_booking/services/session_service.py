from datetime import datetime

import pytz
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.models.session import TherapySession
from therapy_booking.scheduling.types import BookedSession


def _to_aware(dt: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Naive values are therapist-local wall-clock times; attach tz for timestamptz comparison."""
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt


async def list_booked_sessions(
    session: AsyncSession,
    therapist_id: str,
    start: datetime,
    end: datetime,
    statuses: frozenset[str],
    tz: pytz.BaseTzInfo = pytz.UTC,
    exclude_session_id: str | None = None,
) -> list[BookedSession]:
    """Sessions in one of `statuses` overlapping [start, end)."""
    q = select(TherapySession).where(
        TherapySession.therapist_id == therapist_id,
        TherapySession.status.in_(sorted(statuses)),
        TherapySession.start_time < _to_aware(end, tz),
        TherapySession.end_time > _to_aware(start, tz),
    )
    if exclude_session_id:
        q = q.where(TherapySession.id != exclude_session_id)
    result = await session.execute(q.order_by(TherapySession.start_time))
    return [
        BookedSession(
            id=row.id,
            therapist_id=row.therapist_id,
            start=row.start_time,
            end=row.end_time,
            status=row.status,
        )
        for row in result.scalars().all()
    ]
