"""Contact domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_name, validate_us_phone

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class ContactCreate(BaseModel):
    """Schema for a contact form submission"""

    name: str
    email: str
    phone: Optional[str] = None
    message: str
    contactPreference: Optional[Literal["morning", "afternoon", "evening", "anytime"]] = None
    preferredDays: Optional[list[str]] = None

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
        if v:
            return validate_us_phone(v)
        return None

    @field_validator("message")
    @classmethod
    def check_message(cls, v):
        if not v or not v.strip():
            raise ValueError("Message is required")
        return v

    @field_validator("preferredDays")
    @classmethod
    def check_days(cls, v):
        if v is None:
            return v
        days = []
        for day in v:
            normalized = day.strip().capitalize()
            if normalized not in WEEKDAYS:
                raise ValueError(f"Unknown day: {day}")
            if normalized not in days:
                days.append(normalized)
        return days


class ContactResponse(BaseModel):
    """Schema for contact submission response"""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    contactPreference: Optional[str] = None
    preferredDays: Optional[list[str]] = None
    createdAt: datetime

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, submission) -> "ContactResponse":
        return cls(
            id=submission.id,
            name=submission.name,
            email=submission.email,
            phone=submission.phone,
            message=submission.message,
            contactPreference=submission.contact_preference,
            preferredDays=submission.preferred_days,
            createdAt=submission.created_at,
        )
