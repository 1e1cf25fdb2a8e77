"""Booking read models handed to callers and to the email sender."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class BookingDto:
    id: UUID
    room_id: UUID
    guest_name: str
    email_address: str
    check_in: datetime
    check_out: datetime
    guests: int
    total_amount: Decimal
    status: BookingStatus
    special_requests: str
    phone: str
    address: str
    booking_token: UUID
    room_name: Optional[str] = None

    @classmethod
    def from_entity(cls, booking: Booking, *, room_name: Optional[str] = None) -> 'BookingDto':
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            guest_name=booking.guest_name,
            email_address=booking.email_address,
            check_in=booking.check_in,
            check_out=booking.check_out,
            guests=booking.guests,
            total_amount=booking.total_amount,
            status=booking.status,
            special_requests=booking.special_requests,
            phone=booking.contact_info.phone,
            address=booking.contact_info.address,
            booking_token=booking.booking_token,
            room_name=room_name,
        )


@attrs.define(frozen=True)
class BookingCreatedDto:
    """
    Returned by CreateBooking

    When `requires_email_verification` is True the guest must submit the
    emailed OTP before the booking is confirmed.
    """

    id: UUID
    booking_token: UUID
    status: BookingStatus
    total_amount: Decimal
    email_address: str
    requires_email_verification: bool
