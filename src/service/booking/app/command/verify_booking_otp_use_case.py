from uuid import UUID

from opentelemetry import trace

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, InfrastructureError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.app.interface.i_email_sender import IEmailSender
from src.service.booking.app.service.otp_verification_service import OtpVerificationService
from src.service.booking.domain.entity.otp_verification_entity import normalize_email
from src.service.booking.domain.enum.booking_status import BookingStatus


class VerifyBookingOtpUseCase:
    """
    Confirm a booking with the OTP emailed to the guest

    Flow:
    1. Booking must exist, belong to the email and wait for verification
    2. Refuse once the current code has collected max failed attempts
    3. Wrong code: count the failure, commit the count, report invalid
    4. Right code: confirm, retire the code, email the confirmation, commit
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        otp_service: OtpVerificationService,
        email_sender: IEmailSender,
        clock: IClock,
    ) -> None:
        self.uow_factory = uow_factory
        self.otp_service = otp_service
        self.email_sender = email_sender
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self, *, booking_id: UUID, email_address: str, otp_code: str) -> BookingDto:
        with self.tracer.start_as_current_span(
            'use_case.verify_booking_otp',
            attributes={'booking.id': str(booking_id)},
        ):
            async with self.uow_factory() as uow:
                booking = await uow.bookings.get_by_id(booking_id=booking_id, for_update=True)
                if not booking:
                    raise NotFoundError('Booking not found.')

                if normalize_email(email_address) != normalize_email(booking.email_address):
                    raise DomainError('Email address does not match the booking.')
                if booking.status != BookingStatus.EMAIL_VERIFICATION_PENDING:
                    raise DomainError('Booking is not pending email verification.')

                attempts = await self.otp_service.get_otp_attempts(
                    otps=uow.otps, booking_id=booking_id, email_address=email_address
                )
                if self.otp_service.has_exceeded_attempts(attempts):
                    raise DomainError('Maximum OTP attempts exceeded. Please request a new OTP.')

                is_valid = await self.otp_service.validate_otp(
                    otps=uow.otps,
                    booking_id=booking_id,
                    otp_code=otp_code,
                    email_address=email_address,
                )
                if not is_valid:
                    attempts = await self.otp_service.increment_otp_attempts(
                        otps=uow.otps, booking_id=booking_id, email_address=email_address
                    )
                    # The failed attempt must survive the error below
                    await uow.commit()
                    Logger.base.warning(
                        f'⚠️ [VERIFY-OTP] Invalid code for booking {booking_id} '
                        f'(attempt {attempts}/{self.otp_service.max_attempts})'
                    )
                    raise DomainError('Invalid or expired OTP code.')

                confirmed = booking.confirm_after_verification(clock=self.clock)
                await uow.bookings.update(booking=confirmed)
                await self.otp_service.invalidate_otp(
                    otps=uow.otps, booking_id=booking_id, email_address=email_address
                )

                dto = BookingDto.from_entity(confirmed)
                sent = await self.email_sender.send_booking_confirmation(
                    booking=dto,
                    email_address=confirmed.email_address,
                    guest_name=confirmed.guest_name,
                )
                if not sent:
                    raise InfrastructureError(
                        'Failed to send booking confirmation email. Please try again.'
                    )

                await uow.commit()

            Logger.base.info(f'✅ [VERIFY-OTP] Booking {booking_id} confirmed')
            return dto
