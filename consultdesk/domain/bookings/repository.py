"""Booking repository - Database operations for bookings"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking, BookingSlot


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_bookings(db: Session, since: Optional[datetime] = None) -> list[Booking]:
        """Get bookings starting at or after ``since`` (all when None), earliest first"""
        query = db.query(Booking)
        if since is not None:
            query = query.filter(Booking.start_time >= since)
        return query.order_by(Booking.start_time.asc()).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_bookings_between(db: Session, start: datetime, end: datetime) -> list[Booking]:
        """Get bookings overlapping the half-open interval [start, end)"""
        return (
            db.query(Booking)
            .filter(Booking.start_time < end, Booking.end_time > start)
            .order_by(Booking.start_time.asc())
            .all()
        )

    @staticmethod
    def create_booking(db: Session, slot_starts: list[datetime], **booking_data) -> Booking:
        """Insert the booking and its slot reservations in one transaction"""
        booking = Booking(**booking_data)
        booking.slots = [BookingSlot(slot_start=start) for start in slot_starts]
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()
