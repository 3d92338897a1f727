import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_booking.api.deps import get_now, get_session
from therapy_booking.api.schemas.availability import (
    CheckAvailabilityRequest,
    CheckAvailabilityResponse,
    ConflictInfo,
    DaySlotsResponse,
    RangeSlotsResponse,
    SlotInfo,
    SuggestedTime,
)
from therapy_booking.core.config import settings
from therapy_booking.services import availability_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/availability", tags=["availability"])

# Slot lists change with every booking; clients must always refetch.
_NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get("/slots", response_model=DaySlotsResponse)
async def slots_for_date(
    response: Response,
    therapist_id: str = Query(..., min_length=1),
    date_param: date = Query(..., alias="date"),
    include_booked: bool = Query(False),
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> DaySlotsResponse:
    """Slots for one date. Booked slots are omitted unless include_booked is set."""
    mode = "all" if include_booked else "available"
    slots = await availability_service.get_slots_for_date(session, therapist_id, date_param, mode, now=now)
    response.headers.update(_NO_CACHE_HEADERS)
    return DaySlotsResponse(
        date=date_param.isoformat(),
        therapist_id=therapist_id,
        slots=[SlotInfo.from_slot(s) for s in slots],
        total_slots=len(slots),
        message="Available slots found" if slots else "No available slots for this date",
    )


@router.get("", response_model=RangeSlotsResponse)
async def slots_for_range(
    response: Response,
    therapist_id: str = Query(..., min_length=1),
    days_ahead: int = Query(settings.default_days_ahead, ge=1, le=90),
    start_date: date | None = Query(None),
    session: AsyncSession = Depends(get_session),
    now: datetime = Depends(get_now),
) -> RangeSlotsResponse:
    """Every slot for the coming days, with booked ones marked rather than removed."""
    first_day, slots = await availability_service.get_slots_for_range(
        session, therapist_id, start_date, days_ahead, "all", now=now
    )
    response.headers.update(_NO_CACHE_HEADERS)
    return RangeSlotsResponse(
        therapist_id=therapist_id,
        start_date=first_day.isoformat(),
        days=days_ahead,
        availability=[SlotInfo.from_slot(s) for s in slots],
    )


@router.post("/check", response_model=CheckAvailabilityResponse)
async def check_availability(
    body: CheckAvailabilityRequest,
    session: AsyncSession = Depends(get_session),
) -> CheckAvailabilityResponse:
    result = await availability_service.check_window(
        session,
        body.therapist_id,
        body.start_time,
        body.duration_minutes,
        exclude_session_id=body.exclude_session_id,
    )
    return CheckAvailabilityResponse(
        available=result["available"],
        conflicting_sessions=[ConflictInfo.from_session(c) for c in result["conflicting_sessions"]],
        suggested_times=[SuggestedTime(**s) for s in result["suggested_times"]],
    )
