"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.otp_verification_model import (
    OtpVerificationModel,
)
from src.service.booking.driven_adapter.model.room_model import RoomModel

__all__ = [
    'BookingModel',
    'OtpVerificationModel',
    'RoomModel',
]
