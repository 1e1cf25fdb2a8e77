"""Application layer interfaces (Ports)"""

from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.app.interface.i_email_sender import IEmailSender
from src.service.booking.app.interface.i_otp_hasher import IOtpHasher
from src.service.booking.app.interface.i_otp_repo import IOtpRepo
from src.service.booking.app.interface.i_room_repo import IRoomRepo

__all__ = [
    'IBookingRepo',
    'IEmailSender',
    'IOtpHasher',
    'IOtpRepo',
    'IRoomRepo',
]
