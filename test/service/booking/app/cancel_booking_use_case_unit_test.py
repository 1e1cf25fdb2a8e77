"""Unit tests for CancelBookingUseCase"""

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import (
    DomainError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
)
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender
from test.service.booking.builders import GUEST_EMAIL, days, make_booking
from test.service.booking.fakes import InMemoryStore, InMemoryUnitOfWork


@pytest.fixture
def cancel(uow_factory, email_sender, clock) -> CancelBookingUseCase:
    return CancelBookingUseCase(uow_factory=uow_factory, email_sender=email_sender, clock=clock)


@pytest.fixture
def confirmed(room: Room, store: InMemoryStore):
    return store.seed_booking(
        make_booking(room, check_in=days(3), check_out=days(5), status=BookingStatus.CONFIRMED)
    )


@pytest.mark.unit
class TestCancelBooking:
    @pytest.mark.asyncio
    async def test_guest_cancels_own_booking(
        self,
        cancel: CancelBookingUseCase,
        confirmed,
        store: InMemoryStore,
        email_sender: MockEmailSender,
    ) -> None:
        dto = await cancel.execute(booking_id=confirmed.id, email_address='Guest@Example.com')

        assert dto.status == BookingStatus.CANCELLED
        assert store.bookings[confirmed.id].status == BookingStatus.CANCELLED
        assert email_sender.sent_emails[-1]['subject'].startswith('Booking Cancelled')

    @pytest.mark.asyncio
    async def test_staff_cancel_without_email(
        self, cancel: CancelBookingUseCase, confirmed
    ) -> None:
        dto = await cancel.execute(booking_id=confirmed.id)

        assert dto.status == BookingStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_booking_row_is_locked(
        self, confirmed, store: InMemoryStore, email_sender: MockEmailSender, clock
    ) -> None:
        uow = InMemoryUnitOfWork(store)

        await CancelBookingUseCase(
            uow_factory=lambda: uow, email_sender=email_sender, clock=clock
        ).execute(booking_id=confirmed.id)

        assert uow.bookings.locked_booking_ids == [confirmed.id]

    @pytest.mark.asyncio
    async def test_other_guest_is_forbidden(
        self, cancel: CancelBookingUseCase, confirmed, store: InMemoryStore
    ) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            await cancel.execute(booking_id=confirmed.id, email_address='other@example.com')

        assert exc_info.value.status_code == 403
        assert store.bookings[confirmed.id].status == BookingStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_completed_booking(
        self, cancel: CancelBookingUseCase, room: Room, store: InMemoryStore
    ) -> None:
        booking = store.seed_booking(
            make_booking(room, check_in=days(-5), check_out=days(-3), status=BookingStatus.COMPLETED)
        )

        with pytest.raises(DomainError, match='Completed bookings cannot be cancelled.'):
            await cancel.execute(booking_id=booking.id, email_address=GUEST_EMAIL)

    @pytest.mark.asyncio
    async def test_cancelled_dates_become_free(
        self, cancel: CancelBookingUseCase, confirmed, room: Room, store: InMemoryStore
    ) -> None:
        await cancel.execute(booking_id=confirmed.id)

        assert store.load_room(room.id).is_available(days(3), days(5))

    @pytest.mark.asyncio
    async def test_failed_email_keeps_booking(
        self,
        cancel: CancelBookingUseCase,
        confirmed,
        store: InMemoryStore,
        email_sender: MockEmailSender,
    ) -> None:
        email_sender.fail_next = True

        with pytest.raises(InfrastructureError):
            await cancel.execute(booking_id=confirmed.id)

        assert store.bookings[confirmed.id].status == BookingStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_unknown_booking(self, cancel: CancelBookingUseCase) -> None:
        with pytest.raises(NotFoundError, match='Booking not found.'):
            await cancel.execute(booking_id=uuid7())
