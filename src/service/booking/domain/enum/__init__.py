"""Booking Domain Enums"""

from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.room_status import RoomStatus

__all__ = ['BookingStatus', 'RoomStatus']
