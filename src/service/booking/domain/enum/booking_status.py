"""
Booking lifecycle states

Stored as lowercase strings; the transition rules between them live in
`booking_lifecycle.py`.
"""

from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'
    EMAIL_VERIFICATION_PENDING = 'email_verification_pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    CHECKED_IN = 'checked_in'
    CHECKED_OUT = 'checked_out'
    COMPLETED = 'completed'
