"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.contact_info import ContactInfo
from src.service.booking.domain.value_object.room_image import RoomImage

__all__ = ['ContactInfo', 'RoomImage']
