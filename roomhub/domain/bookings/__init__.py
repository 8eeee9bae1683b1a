"""Bookings domain - Booking lifecycle, analytics and CSV export"""

from .router import router

__all__ = ["router"]
