from therapy_booking.models.user import TherapistProfile, TherapistPublic, User
from therapy_booking.models.availability import AvailabilityOverride, AvailabilityTemplate, WeeklyScheduleRecord
from therapy_booking.models.session import TherapySession
from therapy_booking.models.credit import SessionCredit

__all__ = [
    "User",
    "TherapistProfile",
    "TherapistPublic",
    "WeeklyScheduleRecord",
    "AvailabilityTemplate",
    "AvailabilityOverride",
    "TherapySession",
    "SessionCredit",
]
