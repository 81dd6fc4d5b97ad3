"""
Scheduling Domain

Slot grid and availability rules shared by the booking endpoints. The grid
is fixed: 30-minute slots from 9:00 AM to 5:00 PM on business days, all in
the business timezone (BUSINESS_TIMEZONE).
"""

from .slots import (
    DAY_END_HOUR,
    DAY_START_HOUR,
    SLOT_INTERVAL_MINUTES,
    TimeSlot,
    booked_slot_ids,
    business_hours,
    covered_slot_starts,
    current_local_time,
    generate_time_slots,
    is_business_day,
    is_on_slot_boundary,
    is_slot_available,
    slot_id,
    slots_with_availability,
    to_business_time,
)

__all__ = [
    "DAY_END_HOUR",
    "DAY_START_HOUR",
    "SLOT_INTERVAL_MINUTES",
    "TimeSlot",
    "booked_slot_ids",
    "business_hours",
    "covered_slot_starts",
    "current_local_time",
    "generate_time_slots",
    "is_business_day",
    "is_on_slot_boundary",
    "is_slot_available",
    "slot_id",
    "slots_with_availability",
    "to_business_time",
]
