from datetime import UTC, datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.models.credit import SessionCredit
from therapy_booking.models.user import TherapistProfile, TherapistPublic, User

# therapist_profiles.verification_status: pending | approved | rejected
APPROVED_PROFILE_STATUS = "approved"


def bookable_therapist_query(therapist_id: str):
    return (
        select(User)
        .join(TherapistProfile, TherapistProfile.user_id == User.id)
        .where(
            User.id == therapist_id,
            User.user_type == "therapist",
            User.is_active == True,  # noqa: E712
            User.is_verified == True,  # noqa: E712
            TherapistProfile.verification_status == APPROVED_PROFILE_STATUS,
        )
    )


async def get_bookable_therapist(session: AsyncSession, therapist_id: str) -> TherapistPublic | None:
    """Return the therapist only when active, verified and with an approved profile."""
    result = await session.execute(bookable_therapist_query(therapist_id))
    user = result.scalars().first()
    if not user:
        return None
    return TherapistPublic(id=user.id, email=user.email, full_name=user.full_name)


async def count_available_credits(session: AsyncSession, user_id: str) -> int:
    now = datetime.now(UTC)
    result = await session.execute(
        select(func.count(SessionCredit.id)).where(
            SessionCredit.user_id == user_id,
            SessionCredit.used_at.is_(None),
            or_(SessionCredit.expires_at.is_(None), SessionCredit.expires_at > now),
        )
    )
    return int(result.scalar_one() or 0)
