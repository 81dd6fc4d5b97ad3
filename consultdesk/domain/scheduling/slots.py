"""Consultation slot grid and availability rules"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from ...config import BUSINESS_TIMEZONE, EXCLUDE_WEEKENDS

DAY_START_HOUR = 9  # 9 AM
DAY_END_HOUR = 17  # 5 PM
SLOT_INTERVAL_MINUTES = 30
SLOT_DURATION = timedelta(minutes=SLOT_INTERVAL_MINUTES)


@dataclass(frozen=True)
class TimeSlot:
    id: str
    start_time: datetime
    end_time: datetime
    is_available: bool = True


def slot_id(start_time: datetime) -> str:
    return start_time.strftime("%Y-%m-%d-%H-%M")


def generate_time_slots(day: date) -> list[TimeSlot]:
    """Return the fixed 09:00-17:00 grid of 30-minute slots for a date, in order."""
    slots = []
    for hour in range(DAY_START_HOUR, DAY_END_HOUR):
        for minute in range(0, 60, SLOT_INTERVAL_MINUTES):
            start_time = datetime.combine(day, time(hour, minute))
            slots.append(
                TimeSlot(id=slot_id(start_time), start_time=start_time, end_time=start_time + SLOT_DURATION)
            )
    return slots


def is_on_slot_boundary(value: datetime) -> bool:
    return value.minute % SLOT_INTERVAL_MINUTES == 0 and value.second == 0 and value.microsecond == 0


def covered_slot_starts(start_time: datetime, end_time: datetime) -> list[datetime]:
    """Start times of the grid slots making up a slot-aligned booking"""
    starts = []
    current = start_time
    while current < end_time:
        starts.append(current)
        current += SLOT_DURATION
    return starts


def business_hours(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time(DAY_START_HOUR)), datetime.combine(day, time(DAY_END_HOUR))


def is_business_day(day: date) -> bool:
    if not EXCLUDE_WEEKENDS:
        return True
    return day.weekday() < 5  # Mon-Fri


def booked_slot_ids(day: date, bookings: Iterable) -> set[str]:
    """
    Ids of the slots on ``day`` occupied by any of ``bookings``.

    Bookings only need ``start_time``/``end_time`` attributes; a booking
    that straddles several slots occupies all of them.
    """
    booked = set()
    bookings = list(bookings)
    for slot in generate_time_slots(day):
        for booking in bookings:
            if booking.start_time < slot.end_time and booking.end_time > slot.start_time:
                booked.add(slot.id)
                break
    return booked


def is_slot_available(slot: TimeSlot, booked_ids: set[str], now: datetime) -> bool:
    return slot.id not in booked_ids and slot.start_time >= now


def slots_with_availability(
    day: date, booked_ids: set[str], now: Optional[datetime] = None
) -> list[TimeSlot]:
    now = now or current_local_time()
    return [
        replace(slot, is_available=is_slot_available(slot, booked_ids, now))
        for slot in generate_time_slots(day)
    ]


def current_local_time() -> datetime:
    """Naive wall-clock time in the business timezone"""
    return datetime.now(ZoneInfo(BUSINESS_TIMEZONE)).replace(tzinfo=None)


def to_business_time(value: datetime) -> datetime:
    """Convert aware datetimes into naive business-timezone time; naive ones are taken as-is"""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(BUSINESS_TIMEZONE)).replace(tzinfo=None)
