"""
Unit tests for the booking lifecycle transition table

Test Focus:
1. Legal (status, trigger) pairs resolve to the expected target
2. Illegal pairs raise DomainError with the trigger requirement
3. Cancel is available from every status except Completed
"""

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.booking_lifecycle import (
    BookingTrigger,
    allowed_triggers,
    can_transition,
    next_status,
)
from src.service.booking.domain.enum.booking_status import BookingStatus


@pytest.mark.unit
class TestNextStatus:
    @pytest.mark.parametrize(
        'status, trigger, expected',
        [
            (BookingStatus.PENDING, BookingTrigger.CONFIRM, BookingStatus.CONFIRMED),
            (
                BookingStatus.EMAIL_VERIFICATION_PENDING,
                BookingTrigger.CONFIRM_AFTER_VERIFICATION,
                BookingStatus.CONFIRMED,
            ),
            (BookingStatus.CONFIRMED, BookingTrigger.CHECK_IN, BookingStatus.CHECKED_IN),
            (BookingStatus.CHECKED_IN, BookingTrigger.CHECK_OUT, BookingStatus.CHECKED_OUT),
            (BookingStatus.CONFIRMED, BookingTrigger.COMPLETE, BookingStatus.COMPLETED),
            (BookingStatus.PENDING, BookingTrigger.UPDATE_DATES, BookingStatus.PENDING),
        ],
    )
    def test_legal_transitions(self, status, trigger, expected) -> None:
        assert next_status(status, trigger) == expected

    @pytest.mark.parametrize(
        'status, trigger, requirement',
        [
            (BookingStatus.CONFIRMED, BookingTrigger.CONFIRM, 'Only pending bookings'),
            (BookingStatus.PENDING, BookingTrigger.CHECK_IN, 'Only confirmed bookings'),
            (BookingStatus.CONFIRMED, BookingTrigger.CHECK_OUT, 'Only checked-in bookings'),
            (BookingStatus.CHECKED_OUT, BookingTrigger.COMPLETE, 'Only confirmed bookings'),
            (BookingStatus.CONFIRMED, BookingTrigger.UPDATE_DATES, 'before confirmation'),
        ],
    )
    def test_illegal_transitions(self, status, trigger, requirement) -> None:
        with pytest.raises(DomainError) as exc_info:
            next_status(status, trigger)

        assert 'Unsupported or invalid status transition.' in str(exc_info.value)
        assert requirement in str(exc_info.value)

    @pytest.mark.parametrize(
        'status', [s for s in BookingStatus if s != BookingStatus.COMPLETED]
    )
    def test_cancel_from_any_non_completed_status(self, status: BookingStatus) -> None:
        assert next_status(status, BookingTrigger.CANCEL) == BookingStatus.CANCELLED

    def test_cancel_completed_has_specific_message(self) -> None:
        with pytest.raises(DomainError, match='^Completed bookings cannot be cancelled.$'):
            next_status(BookingStatus.COMPLETED, BookingTrigger.CANCEL)


@pytest.mark.unit
class TestTriggerQueries:
    def test_can_transition(self) -> None:
        assert can_transition(BookingStatus.PENDING, BookingTrigger.CONFIRM)
        assert not can_transition(BookingStatus.COMPLETED, BookingTrigger.CANCEL)

    def test_completed_is_terminal(self) -> None:
        assert allowed_triggers(BookingStatus.COMPLETED) == []

    def test_pending_triggers(self) -> None:
        assert set(allowed_triggers(BookingStatus.PENDING)) == {
            BookingTrigger.CONFIRM,
            BookingTrigger.CANCEL,
            BookingTrigger.UPDATE_DATES,
        }
