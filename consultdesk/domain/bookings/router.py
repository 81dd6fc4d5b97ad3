"""Booking router - FastAPI endpoints for consultation bookings"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ...auth import require_admin, security
from ...config import BOOKING_RATE_LIMIT
from ...database import get_db
from ...rate_limiter import create_rate_limiter
from .schemas import BookingCreate, BookingResponse, DayAvailabilityResponse, SlotResponse
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

booking_rate_limit = create_rate_limiter(
    limit=BOOKING_RATE_LIMIT, window_seconds=3600, key_prefix="bookings"
)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    _: None = Depends(booking_rate_limit),
    service: BookingService = Depends(get_booking_service),
):
    """Book a consultation slot (public)"""
    booking = service.create_booking(data)
    return BookingResponse.from_model(booking)


@router.get("", response_model=DayAvailabilityResponse | list[BookingResponse])
async def get_bookings(
    day: Optional[date] = Query(None, alias="date"),
    include_past: bool = Query(False, alias="includePast"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: BookingService = Depends(get_booking_service),
):
    """
    With ``?date=YYYY-MM-DD``: the public slot grid for that date.
    Without: upcoming bookings for the admin dashboard (requires admin token).
    """
    if day is not None:
        business_day, slots = service.get_availability(day)
        return DayAvailabilityResponse(
            date=day,
            businessDay=business_day,
            slots=[
                SlotResponse(
                    id=s.id, startTime=s.start_time, endTime=s.end_time, isAvailable=s.is_available
                )
                for s in slots
            ],
        )

    await require_admin(credentials)
    bookings = service.get_bookings(include_past=include_past)
    logger.info(f"Fetched {len(bookings)} bookings")
    return [BookingResponse.from_model(b) for b in bookings]


@router.delete("")
async def delete_booking(
    booking_id: Optional[str] = Query(None, alias="id"),
    _admin: dict = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """Cancel a booking (admin)"""
    return service.delete_booking(booking_id)
