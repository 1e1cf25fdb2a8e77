"""
Unit tests for the Booking entity

Test Focus:
1. Create: every creation guard, initial status, one-time booking token
2. Transitions return new objects and follow the lifecycle table
3. Complete() and UpdateBookingDates() read "now" from the injected clock
4. Rehydrate() accepts past-dated persisted state without validation
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from src.platform.clock.clock import FixedClock
from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from test.service.booking.builders import CONTACT, GUEST_EMAIL, NOW, days, make_booking, make_room


def _create(clock: FixedClock, **overrides) -> Booking:
    params = {
        'room_id': make_room().id,
        'check_in': days(1),
        'check_out': days(3),
        'guests': 2,
        'total_amount': Decimal('200'),
        'contact_info': CONTACT,
        'email_address': GUEST_EMAIL,
        'guest_name': 'Ada Guest',
        'clock': clock,
    }
    params.update(overrides)
    return Booking.create(**params)


@pytest.mark.unit
class TestBookingCreate:
    def test_new_booking_is_pending(self, clock: FixedClock) -> None:
        booking = _create(clock)

        assert booking.status == BookingStatus.PENDING
        assert booking.created_at == NOW
        assert booking.updated_at == NOW
        assert booking.booking_token is not None

    def test_otp_gate_starts_in_email_verification_pending(self, clock: FixedClock) -> None:
        booking = _create(clock, require_email_verification=True)

        assert booking.status == BookingStatus.EMAIL_VERIFICATION_PENDING

    def test_each_booking_gets_its_own_token(self, clock: FixedClock) -> None:
        assert _create(clock).booking_token != _create(clock).booking_token

    @pytest.mark.parametrize(
        'overrides, message',
        [
            ({'check_in': days(3), 'check_out': days(3)}, 'before check-out'),
            ({'check_in': days(4), 'check_out': days(3)}, 'before check-out'),
            ({'check_in': days(-1), 'check_out': days(2)}, 'in the past'),
            ({'guests': 0}, 'guests'),
            ({'total_amount': Decimal('0')}, 'Total amount'),
            ({'guest_name': '  '}, 'Guest name'),
            ({'email_address': ''}, 'Email address'),
        ],
    )
    def test_invalid_input_is_rejected(
        self, clock: FixedClock, overrides: dict, message: str
    ) -> None:
        with pytest.raises(DomainError, match=message):
            _create(clock, **overrides)

    def test_check_in_exactly_now_is_allowed(self, clock: FixedClock) -> None:
        booking = _create(clock, check_in=NOW, check_out=days(1))

        assert booking.check_in == NOW


@pytest.mark.unit
class TestBookingTransitions:
    def test_confirm_from_pending(self, clock: FixedClock) -> None:
        pending = _create(clock)
        clock.advance(timedelta(hours=1))

        confirmed = pending.confirm(clock=clock)

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.updated_at == NOW + timedelta(hours=1)
        # Original object is untouched
        assert pending.status == BookingStatus.PENDING

    def test_confirm_twice_fails(self, clock: FixedClock) -> None:
        confirmed = _create(clock).confirm(clock=clock)

        with pytest.raises(DomainError, match='Unsupported or invalid status transition'):
            confirmed.confirm(clock=clock)

    def test_confirm_requires_pending_not_email_verification(self, clock: FixedClock) -> None:
        awaiting = _create(clock, require_email_verification=True)

        with pytest.raises(DomainError):
            awaiting.confirm(clock=clock)

    def test_confirm_after_verification(self, clock: FixedClock) -> None:
        awaiting = _create(clock, require_email_verification=True)

        assert awaiting.confirm_after_verification(clock=clock).status == BookingStatus.CONFIRMED

    def test_confirm_after_verification_rejects_pending(self, clock: FixedClock) -> None:
        with pytest.raises(DomainError, match='not pending email verification'):
            _create(clock).confirm_after_verification(clock=clock)

    def test_check_in_then_check_out(self, clock: FixedClock) -> None:
        booking = _create(clock).confirm(clock=clock)

        checked_in = booking.check_in_guest(clock=clock)
        checked_out = checked_in.check_out_guest(clock=clock)

        assert checked_in.status == BookingStatus.CHECKED_IN
        assert checked_out.status == BookingStatus.CHECKED_OUT

    def test_check_out_requires_check_in(self, clock: FixedClock) -> None:
        with pytest.raises(DomainError):
            _create(clock).confirm(clock=clock).check_out_guest(clock=clock)

    def test_cancel_pending_booking(self, clock: FixedClock) -> None:
        assert _create(clock).cancel(clock=clock).status == BookingStatus.CANCELLED

    def test_completed_booking_cannot_be_cancelled(self, clock: FixedClock) -> None:
        room = make_room()
        completed = make_booking(
            room, check_in=days(-5), check_out=days(-2), status=BookingStatus.COMPLETED
        )

        with pytest.raises(DomainError, match='Completed bookings cannot be cancelled.'):
            completed.cancel(clock=clock)


@pytest.mark.unit
class TestBookingComplete:
    def test_complete_after_check_out(self, clock: FixedClock) -> None:
        room = make_room()
        confirmed = make_booking(
            room, check_in=days(-5), check_out=days(-2), status=BookingStatus.CONFIRMED
        )

        assert confirmed.complete(clock=clock).status == BookingStatus.COMPLETED

    def test_complete_on_check_out_instant(self, clock: FixedClock) -> None:
        room = make_room()
        confirmed = make_booking(
            room, check_in=days(-2), check_out=NOW, status=BookingStatus.CONFIRMED
        )

        assert confirmed.complete(clock=clock).status == BookingStatus.COMPLETED

    def test_complete_before_check_out_fails(self, clock: FixedClock) -> None:
        confirmed = _create(clock).confirm(clock=clock)

        with pytest.raises(DomainError, match='before the check-out date'):
            confirmed.complete(clock=clock)

    def test_complete_succeeds_once_clock_passes_check_out(self, clock: FixedClock) -> None:
        confirmed = _create(clock).confirm(clock=clock)
        clock.advance(timedelta(days=3))

        assert confirmed.complete(clock=clock).status == BookingStatus.COMPLETED

    def test_complete_requires_confirmed(self, clock: FixedClock) -> None:
        room = make_room()
        pending = make_booking(room, check_in=days(-5), check_out=days(-2))

        with pytest.raises(DomainError, match='Only confirmed bookings can be completed'):
            pending.complete(clock=clock)


@pytest.mark.unit
class TestBookingUpdateDates:
    def test_pending_booking_moves(self, clock: FixedClock) -> None:
        booking = _create(clock)

        moved = booking.update_booking_dates(check_in=days(5), check_out=days(7), clock=clock)

        assert (moved.check_in, moved.check_out) == (days(5), days(7))
        assert moved.status == BookingStatus.PENDING
        assert moved.total_amount == booking.total_amount

    def test_email_verification_pending_booking_moves(self, clock: FixedClock) -> None:
        booking = _create(clock, require_email_verification=True)

        moved = booking.update_booking_dates(check_in=days(5), check_out=days(7), clock=clock)

        assert moved.status == BookingStatus.EMAIL_VERIFICATION_PENDING

    def test_confirmed_booking_cannot_move(self, clock: FixedClock) -> None:
        confirmed = _create(clock).confirm(clock=clock)

        with pytest.raises(DomainError, match='before confirmation'):
            confirmed.update_booking_dates(check_in=days(5), check_out=days(7), clock=clock)

    @pytest.mark.parametrize(
        'check_in, check_out',
        [(days(7), days(5)), (days(5), days(5)), (days(-1), days(2))],
    )
    def test_invalid_new_dates(self, clock: FixedClock, check_in, check_out) -> None:
        with pytest.raises(DomainError):
            _create(clock).update_booking_dates(
                check_in=check_in, check_out=check_out, clock=clock
            )


@pytest.mark.unit
class TestBookingQueries:
    def test_total_amount_is_price_times_nights(self) -> None:
        amount = Booking.calculate_total_amount(
            price=Decimal('100'), check_in=days(1), check_out=days(3)
        )

        assert amount == Decimal('200.00')

    def test_total_amount_counts_partial_days(self) -> None:
        amount = Booking.calculate_total_amount(
            price=Decimal('100'), check_in=days(1), check_out=days(2.5)
        )

        assert amount == Decimal('150.00')

    def test_overlap_is_half_open(self) -> None:
        booking = make_booking(make_room(), check_in=days(1), check_out=days(3))

        assert booking.overlaps(days(2), days(4))
        assert booking.overlaps(days(0), days(5))
        assert not booking.overlaps(days(3), days(5))
        assert not booking.overlaps(days(-1), days(1))

    def test_future_commitment(self) -> None:
        room = make_room()

        assert make_booking(room, check_in=days(1), check_out=days(2)).is_future_commitment(NOW)
        assert not make_booking(
            room, check_in=days(1), check_out=days(2), status=BookingStatus.CANCELLED
        ).is_future_commitment(NOW)
        assert not make_booking(
            room, check_in=days(-1), check_out=days(2), status=BookingStatus.CONFIRMED
        ).is_future_commitment(NOW)

    def test_rehydrate_keeps_past_dates(self) -> None:
        booking = make_booking(
            make_room(), check_in=days(-10), check_out=days(-8), status=BookingStatus.CHECKED_OUT
        )

        assert booking.check_in == days(-10)
        assert booking.status == BookingStatus.CHECKED_OUT
