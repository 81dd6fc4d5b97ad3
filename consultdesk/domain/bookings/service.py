"""Booking service - Business logic for consultation bookings"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Booking
from ...utils.sanitization import validate_and_sanitize_input
from ..scheduling import (
    TimeSlot,
    booked_slot_ids,
    business_hours,
    covered_slot_starts,
    current_local_time,
    is_business_day,
    is_on_slot_boundary,
    slots_with_availability,
)
from .repository import BookingRepository
from .schemas import BookingCreate

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time slot is already booked"


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    def get_availability(self, day: date, now: Optional[datetime] = None) -> tuple[bool, list[TimeSlot]]:
        """Return (business_day, slots) for a date; non-business days have no slots"""
        if not is_business_day(day):
            return False, []

        day_start = datetime.combine(day, datetime.min.time())
        try:
            bookings = self.repo.get_bookings_between(
                self.db, day_start, day_start + timedelta(days=1)
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Database error fetching availability for {day}: {e}")
            raise HTTPException(
                status_code=500, detail={"error": "Failed to fetch availability", "details": str(e)}
            ) from e

        booked_ids = booked_slot_ids(day, bookings)
        return True, slots_with_availability(day, booked_ids, now or current_local_time())

    def get_bookings(self, include_past: bool = False) -> list[Booking]:
        """Get upcoming bookings ordered by start time"""
        since = None if include_past else current_local_time()
        try:
            return self.repo.get_bookings(self.db, since)
        except SQLAlchemyError as e:
            logger.error(f"❌ Database error fetching bookings: {e}")
            raise HTTPException(
                status_code=500, detail={"error": "Failed to fetch bookings", "details": str(e)}
            ) from e

    def create_booking(self, data: BookingCreate) -> Booking:
        """Validate the requested interval and reserve it"""
        start_time, end_time = data.startTime, data.endTime
        logger.info(f"📅 Booking request for {start_time:%Y-%m-%d %H:%M} - {end_time:%H:%M}")

        self._validate_window(start_time, end_time)

        conflicts = self.repo.get_bookings_between(self.db, start_time, end_time)
        if conflicts:
            logger.warning(f"⚠️ Slot conflict at {start_time} with booking {conflicts[0].id}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)

        try:
            notes = validate_and_sanitize_input(data.notes, max_length=2000) or None
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        try:
            booking = self.repo.create_booking(
                self.db,
                covered_slot_starts(start_time, end_time),
                start_time=start_time,
                end_time=end_time,
                name=data.name,
                email=data.email,
                phone=data.phone,
                notes=notes,
            )
        except IntegrityError as e:
            # A concurrent request reserved one of these slots first
            self.db.rollback()
            logger.warning(f"⚠️ Booking insert lost race for {start_time}: {e.orig}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create booking: {e}")
            raise HTTPException(
                status_code=500, detail={"error": "Failed to create booking", "details": str(e)}
            ) from e

        logger.info(f"✅ Created booking {booking.id}")
        return booking

    def delete_booking(self, booking_id: Optional[str]) -> dict:
        """Cancel a booking by id"""
        if not booking_id:
            raise HTTPException(status_code=400, detail="Booking ID is required")

        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        try:
            self.repo.delete_booking(self.db, booking)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete booking {booking_id}: {e}")
            raise HTTPException(
                status_code=500, detail={"error": "Failed to delete booking", "details": str(e)}
            ) from e

        logger.info(f"🗑️ Cancelled booking {booking_id}")
        return {"success": True}

    @staticmethod
    def _validate_window(start_time: datetime, end_time: datetime) -> None:
        if start_time < current_local_time():
            raise HTTPException(status_code=400, detail="Cannot book a time in the past")

        if not is_business_day(start_time.date()):
            raise HTTPException(status_code=400, detail="Bookings are not available on weekends")

        opens, closes = business_hours(start_time.date())
        if start_time < opens or end_time > closes:
            raise HTTPException(
                status_code=400, detail="Bookings must fall between 9:00 AM and 5:00 PM"
            )

        if not (is_on_slot_boundary(start_time) and is_on_slot_boundary(end_time)):
            raise HTTPException(
                status_code=400, detail="Bookings must start and end on a 30-minute slot boundary"
            )
