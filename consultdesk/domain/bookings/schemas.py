"""Booking domain schemas - Pydantic models for validation"""

from datetime import date as DateType
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_email, validate_name, validate_us_phone
from ..scheduling import SLOT_INTERVAL_MINUTES, to_business_time


class BookingCreate(BaseModel):
    """
    Schema for booking a consultation.

    Accepts either explicit ``startTime``/``endTime`` timestamps or a
    ``date`` plus ``time`` ("HH:MM"), in which case the booking covers one
    30-minute slot.
    """

    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None
    date: Optional[DateType] = None
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    name: str
    email: str
    phone: str
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if not v:
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if not v:
            raise ValueError("Phone is required")
        return validate_us_phone(v)

    @model_validator(mode="after")
    def resolve_times(self):
        explicit = self.startTime is not None or self.endTime is not None
        if explicit and (self.date is not None or self.time is not None):
            raise ValueError("Provide either startTime and endTime, or date and time, not both")

        if not explicit and self.date is not None and self.time is not None:
            hour, minute = map(int, self.time.split(":"))
            self.startTime = datetime(self.date.year, self.date.month, self.date.day, hour, minute)
            self.endTime = self.startTime + timedelta(minutes=SLOT_INTERVAL_MINUTES)

        if self.startTime is None or self.endTime is None:
            raise ValueError("Provide startTime and endTime, or date and time")

        # Stored times are naive business-timezone wall clock
        self.startTime = to_business_time(self.startTime)
        self.endTime = to_business_time(self.endTime)
        if self.startTime >= self.endTime:
            raise ValueError("startTime must be before endTime")
        return self


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: str
    startTime: datetime
    endTime: datetime
    name: str
    email: str
    phone: str
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            startTime=booking.start_time,
            endTime=booking.end_time,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            notes=booking.notes,
            createdAt=booking.created_at,
        )


class SlotResponse(BaseModel):
    id: str
    startTime: datetime
    endTime: datetime
    isAvailable: bool


class DayAvailabilityResponse(BaseModel):
    """Slot grid for a single date"""

    date: DateType
    businessDay: bool
    slots: list[SlotResponse]
