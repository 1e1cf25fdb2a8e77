"""Mock email sender that prints to console instead of sending real emails."""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.app.interface.i_email_sender import IEmailSender


class MockEmailSender(IEmailSender):
    def __init__(self, debug: bool = True, hotel_name: str = 'Hotel Booking System'):
        self.debug = debug
        self.hotel_name = hotel_name
        self.sent_emails: List[dict] = []  # Store sent emails for testing
        self.fail_next: bool = False  # Simulates one failed delivery

    # Not IO-logged: bodies carry OTP codes in plain text
    async def send_email(
        self, to: str, subject: str, body: str, cc: Optional[List[str]] = None
    ) -> bool:
        if self.fail_next:
            self.fail_next = False
            Logger.base.warning(f'📧 [MOCK-EMAIL] Simulated delivery failure to {to}')
            return False

        email_data = {
            'to': to,
            'subject': subject,
            'body': body,
            'cc': cc or [],
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        if self.debug:
            print('\n' + '=' * 50)
            print('📧 MOCK EMAIL SENT')
            print('=' * 50)
            print(f'To: {to}')
            if cc:
                print(f'CC: {", ".join(cc)}')
            print(f'Subject: {subject}')
            print(f'Time: {email_data["sent_at"].strftime("%Y-%m-%d %H:%M:%S")}')
            print('-' * 50)
            print('Body:')
            print(body)
            print('=' * 50 + '\n')

        return True

    @staticmethod
    def _stay_summary(booking: BookingDto) -> str:
        room = f'Room: {booking.room_name}\n        ' if booking.room_name else ''
        return (
            f'{room}Check-in: {booking.check_in:%Y-%m-%d}\n'
            f'        Check-out: {booking.check_out:%Y-%m-%d}\n'
            f'        Guests: {booking.guests}\n'
            f'        Total: ${booking.total_amount:.2f}\n'
            f'        Status: {booking.status}'
        )

    @Logger.io
    async def send_otp_verification(
        self, *, email_address: str, guest_name: str, otp_code: str, booking_id: UUID
    ) -> bool:
        subject = 'Verify Your Booking - One-Time Passcode'
        body = f"""
        Dear {guest_name},

        Use the code below to confirm booking {booking_id}:

        {otp_code}

        The code expires in 15 minutes. If you did not make this booking,
        you can ignore this email.

        Best regards,
        {self.hotel_name}
        """
        return await self.send_email(email_address, subject, body.strip())

    @Logger.io
    async def send_booking_confirmation(
        self, *, booking: BookingDto, email_address: str, guest_name: str
    ) -> bool:
        subject = f'Booking Confirmed - {booking.id}'
        body = f"""
        Dear {guest_name},

        Your booking is confirmed!

        Booking Details:
        ----------------
        {self._stay_summary(booking)}

        Keep this reference to view your booking: {booking.booking_token}

        Best regards,
        {self.hotel_name}
        """
        return await self.send_email(email_address, subject, body.strip())

    @Logger.io
    async def send_booking_cancellation(
        self, *, booking: BookingDto, email_address: str, guest_name: str
    ) -> bool:
        subject = f'Booking Cancelled - {booking.id}'
        body = f"""
        Dear {guest_name},

        Your booking has been cancelled.

        Cancellation Details:
        ---------------------
        {self._stay_summary(booking)}

        If you have any questions, please contact our front desk.

        Best regards,
        {self.hotel_name}
        """
        return await self.send_email(email_address, subject, body.strip())

    @Logger.io
    async def send_booking_update(
        self, *, booking: BookingDto, email_address: str, guest_name: str, update_type: str
    ) -> bool:
        subject = f'Booking Updated - {booking.id}'
        body = f"""
        Dear {guest_name},

        Your booking has been updated ({update_type.replace('_', ' ')}).

        Updated Details:
        ----------------
        {self._stay_summary(booking)}

        Best regards,
        {self.hotel_name}
        """
        return await self.send_email(email_address, subject, body.strip())
