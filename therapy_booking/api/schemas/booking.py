from datetime import date, datetime

from pydantic import BaseModel


class BookingValidationResponse(BaseModel):
    success: bool = True
    therapist_id: str
    session_date: date
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    available_credits: int | None = None
    message: str = "Slot is available for booking"


class BookingErrorResponse(BaseModel):
    detail: str
    error_type: str
