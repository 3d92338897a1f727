import logging
from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.api.deps import get_now, get_session
from therapy_booking.api.schemas.booking import BookingErrorResponse, BookingValidationResponse
from therapy_booking.scheduling.types import BookingRequest
from therapy_booking.services import booking_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "/validate",
    response_model=BookingValidationResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": BookingErrorResponse},
        status.HTTP_402_PAYMENT_REQUIRED: {"model": BookingErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": BookingErrorResponse},
        status.HTTP_409_CONFLICT: {"model": BookingErrorResponse},
    },
)
async def validate_booking(
    body: BookingRequest,
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> BookingValidationResponse:
    """
    Check that a requested session can be booked right now.

    Booking errors propagate to the app's exception handler, which answers
    with the error's status code.
    """
    result = await booking_service.validate_booking(session, body, now)
    logger.info(
        "Booking validated: therapist=%s start=%s duration=%d",
        result.therapist_id,
        result.start.isoformat(),
        result.duration_minutes,
    )
    return BookingValidationResponse(
        therapist_id=result.therapist_id,
        session_date=result.session_date,
        start_time=result.start,
        end_time=result.end,
        duration_minutes=result.duration_minutes,
        available_credits=result.available_credits,
    )
