from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, InfrastructureError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_email_sender import IEmailSender
from src.service.booking.app.service.otp_verification_service import OtpVerificationService
from src.service.booking.domain.entity.otp_verification_entity import normalize_email
from src.service.booking.domain.enum.booking_status import BookingStatus


class ResendOtpUseCase:
    """
    Issue a replacement OTP for a booking awaiting verification

    Limited by the resend counter only; a fresh code also resets the failed
    attempt counter because attempts are tracked per code.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        otp_service: OtpVerificationService,
        email_sender: IEmailSender,
    ) -> None:
        self.uow_factory = uow_factory
        self.otp_service = otp_service
        self.email_sender = email_sender

    @Logger.io
    async def execute(self, *, booking_id: UUID, email_address: str) -> None:
        async with self.uow_factory() as uow:
            booking = await uow.bookings.get_by_id(booking_id=booking_id, for_update=True)
            if not booking:
                raise NotFoundError('Booking not found.')

            if booking.status != BookingStatus.EMAIL_VERIFICATION_PENDING:
                raise DomainError('Booking is not pending email verification.')
            if normalize_email(email_address) != normalize_email(booking.email_address):
                raise DomainError('Email address does not match the booking.')

            resend_count = await self.otp_service.get_resend_count(
                otps=uow.otps, booking_id=booking_id, email_address=email_address
            )
            if self.otp_service.has_exceeded_resends(resend_count):
                raise DomainError('Maximum OTP resend attempts exceeded. Please try again later.')

            otp_code = await self.otp_service.generate_otp(
                otps=uow.otps,
                booking_id=booking_id,
                email_address=email_address,
                is_resend=True,
            )
            sent = await self.email_sender.send_otp_verification(
                email_address=booking.email_address,
                guest_name=booking.guest_name,
                otp_code=otp_code,
                booking_id=booking_id,
            )
            if not sent:
                raise InfrastructureError('Failed to send OTP email. Please try again.')

            await uow.commit()
