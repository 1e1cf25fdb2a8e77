"""
Booking lifecycle transition table

Every legal move of a booking is one `(status, trigger) -> status` entry
below. Booking transition methods never branch on status themselves; they
ask `next_status()` and get either the target state or a `DomainError`.
"""

from enum import StrEnum

from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.enum.booking_status import BookingStatus


class BookingTrigger(StrEnum):
    CONFIRM = 'confirm'
    CONFIRM_AFTER_VERIFICATION = 'confirm_after_verification'
    CANCEL = 'cancel'
    CHECK_IN = 'check_in'
    CHECK_OUT = 'check_out'
    COMPLETE = 'complete'
    UPDATE_DATES = 'update_dates'


_TRANSITIONS: dict[tuple[BookingStatus, BookingTrigger], BookingStatus] = {
    (BookingStatus.PENDING, BookingTrigger.CONFIRM): BookingStatus.CONFIRMED,
    (
        BookingStatus.EMAIL_VERIFICATION_PENDING,
        BookingTrigger.CONFIRM_AFTER_VERIFICATION,
    ): BookingStatus.CONFIRMED,
    (BookingStatus.CONFIRMED, BookingTrigger.CHECK_IN): BookingStatus.CHECKED_IN,
    (BookingStatus.CHECKED_IN, BookingTrigger.CHECK_OUT): BookingStatus.CHECKED_OUT,
    (BookingStatus.CONFIRMED, BookingTrigger.COMPLETE): BookingStatus.COMPLETED,
    (BookingStatus.PENDING, BookingTrigger.UPDATE_DATES): BookingStatus.PENDING,
    (
        BookingStatus.EMAIL_VERIFICATION_PENDING,
        BookingTrigger.UPDATE_DATES,
    ): BookingStatus.EMAIL_VERIFICATION_PENDING,
    # Cancel is reachable from every state except Completed
    **{
        (status, BookingTrigger.CANCEL): BookingStatus.CANCELLED
        for status in BookingStatus
        if status != BookingStatus.COMPLETED
    },
}

# Rule-specific wording for the transitions callers hit most often
_REJECTION_MESSAGES: dict[tuple[BookingStatus, BookingTrigger], str] = {
    (BookingStatus.COMPLETED, BookingTrigger.CANCEL): 'Completed bookings cannot be cancelled.',
}

_TRIGGER_REQUIREMENTS: dict[BookingTrigger, str] = {
    BookingTrigger.CONFIRM: 'Only pending bookings can be confirmed.',
    BookingTrigger.CONFIRM_AFTER_VERIFICATION: 'Booking is not pending email verification.',
    BookingTrigger.CHECK_IN: 'Only confirmed bookings can be checked in.',
    BookingTrigger.CHECK_OUT: 'Only checked-in bookings can be checked out.',
    BookingTrigger.COMPLETE: 'Only confirmed bookings can be completed.',
    BookingTrigger.UPDATE_DATES: 'Booking dates can only be changed before confirmation.',
}


def can_transition(status: BookingStatus, trigger: BookingTrigger) -> bool:
    return (status, trigger) in _TRANSITIONS


def next_status(status: BookingStatus, trigger: BookingTrigger) -> BookingStatus:
    """
    Resolve the target state for `trigger` fired from `status`.

    Raises:
        DomainError: When the table has no entry for the pair
    """
    target = _TRANSITIONS.get((status, trigger))
    if target is not None:
        return target

    message = _REJECTION_MESSAGES.get((status, trigger))
    if message is None:
        requirement = _TRIGGER_REQUIREMENTS.get(trigger, '')
        message = f'Unsupported or invalid status transition. {requirement}'.strip()
    raise DomainError(message)


def allowed_triggers(status: BookingStatus) -> list[BookingTrigger]:
    return [trigger for (source, trigger) in _TRANSITIONS if source == status]
