"""Bookings Domain - consultation slot reservations"""

from .router import router

__all__ = ["router"]
