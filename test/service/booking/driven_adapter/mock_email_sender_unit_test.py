"""Unit tests for MockEmailSender"""

from decimal import Decimal

import pytest
from uuid_utils.compat import uuid7

from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender
from test.service.booking.builders import GUEST_EMAIL, days, make_booking, make_room


@pytest.fixture
def booking_dto() -> BookingDto:
    room = make_room()
    return BookingDto.from_entity(
        make_booking(room, check_in=days(1), check_out=days(3), total_amount=Decimal('200')),
        room_name=room.name,
    )


@pytest.mark.unit
class TestMockEmailSender:
    @pytest.mark.asyncio
    async def test_otp_email(self, email_sender: MockEmailSender) -> None:
        booking_id = uuid7()

        sent = await email_sender.send_otp_verification(
            email_address=GUEST_EMAIL, guest_name='Ada', otp_code='482913', booking_id=booking_id
        )

        assert sent
        [email] = email_sender.sent_emails
        assert email['to'] == GUEST_EMAIL
        assert '482913' in email['body']
        assert str(booking_id) in email['body']

    @pytest.mark.asyncio
    async def test_confirmation_email(
        self, email_sender: MockEmailSender, booking_dto: BookingDto
    ) -> None:
        await email_sender.send_booking_confirmation(
            booking=booking_dto, email_address=GUEST_EMAIL, guest_name='Ada'
        )

        body = email_sender.sent_emails[-1]['body']
        assert 'Room: Sea View' in body
        assert 'Total: $200.00' in body
        assert str(booking_dto.booking_token) in body

    @pytest.mark.asyncio
    async def test_update_email_names_the_change(
        self, email_sender: MockEmailSender, booking_dto: BookingDto
    ) -> None:
        await email_sender.send_booking_update(
            booking=booking_dto,
            email_address=GUEST_EMAIL,
            guest_name='Ada',
            update_type='dates_changed',
        )

        assert '(dates changed)' in email_sender.sent_emails[-1]['body']

    @pytest.mark.asyncio
    async def test_simulated_failure_affects_one_send(
        self, email_sender: MockEmailSender, booking_dto: BookingDto
    ) -> None:
        email_sender.fail_next = True

        first = await email_sender.send_booking_cancellation(
            booking=booking_dto, email_address=GUEST_EMAIL, guest_name='Ada'
        )
        second = await email_sender.send_booking_cancellation(
            booking=booking_dto, email_address=GUEST_EMAIL, guest_name='Ada'
        )

        assert (first, second) == (False, True)
        assert len(email_sender.sent_emails) == 1

    @pytest.mark.asyncio
    async def test_debug_prints_to_console(self, capsys: pytest.CaptureFixture[str]) -> None:
        sender = MockEmailSender(debug=True)

        await sender.send_email(GUEST_EMAIL, 'Hello', 'Body text', cc=['desk@hotel.test'])

        out = capsys.readouterr().out
        assert 'MOCK EMAIL SENT' in out
        assert 'CC: desk@hotel.test' in out
