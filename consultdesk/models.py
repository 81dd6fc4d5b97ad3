import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from .database import Base


def generate_public_id():
    """Generate a unique public ID for records addressed by the API"""
    return str(uuid.uuid4())


def utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (CheckConstraint("start_time < end_time", name="ck_bookings_time_order"),)

    id = Column(String(36), primary_key=True, default=generate_public_id)
    # Wall-clock time in the business timezone; every covered slot is also held in booking_slots
    start_time = Column(DateTime, unique=True, index=True, nullable=False)
    end_time = Column(DateTime, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    phone = Column(String(50), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    slots = relationship("BookingSlot", back_populates="booking", cascade="all, delete-orphan")


class BookingSlot(Base):
    """One reserved 30-minute grid slot; the primary key lets each slot be held by a single booking"""

    __tablename__ = "booking_slots"

    slot_start = Column(DateTime, primary_key=True)
    booking_id = Column(
        String(36), ForeignKey("bookings.id", ondelete="CASCADE"), index=True, nullable=False
    )

    booking = relationship("Booking", back_populates="slots")


class ContactSubmission(Base):
    __tablename__ = "contact_submissions"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)
    contact_preference = Column(String(50), nullable=True)  # morning, afternoon, evening, anytime
    preferred_days = Column(JSON, nullable=True)  # e.g. ["Monday", "Wednesday"]
    created_at = Column(DateTime, default=utc_now, index=True, nullable=False)
