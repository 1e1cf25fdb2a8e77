from datetime import datetime
from uuid import UUID

from opentelemetry import trace

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, InfrastructureError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingCreatedDto, BookingDto
from src.service.booking.app.interface.i_email_sender import IEmailSender
from src.service.booking.app.service.otp_verification_service import OtpVerificationService
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.value_object.contact_info import ContactInfo


class CreateBookingUseCase:
    """
    Create booking use case

    Flow (one transaction):
    1. Load the room with a row lock (serializes concurrent bookings of one room)
    2. Check availability against the latest committed bookings
    3. Price the stay (room price x nights) and create the booking
    4. OTP gate on: issue an OTP and email it; booking waits in EMAIL_VERIFICATION_PENDING
       OTP gate off: confirm immediately and email the confirmation
    5. Commit

    Any failure, including an email that could not be delivered, rolls the
    whole booking back.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        otp_service: OtpVerificationService,
        email_sender: IEmailSender,
        clock: IClock,
        require_email_verification: bool = True,
    ) -> None:
        self.uow_factory = uow_factory
        self.otp_service = otp_service
        self.email_sender = email_sender
        self.clock = clock
        self.require_email_verification = require_email_verification
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self,
        *,
        room_id: UUID,
        check_in: datetime,
        check_out: datetime,
        guests: int,
        guest_name: str,
        email_address: str,
        phone: str,
        address: str,
        special_requests: str = '',
    ) -> BookingCreatedDto:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'room.id': str(room_id)},
        ):
            async with self.uow_factory() as uow:
                room = await uow.rooms.get_by_id(room_id=room_id, for_update=True)
                if not room:
                    raise NotFoundError('Room not found.')

                if not room.is_available(check_in, check_out):
                    raise DomainError('Room is not available on selected dates.')
                if guests > room.capacity:
                    raise DomainError('Number of guests exceeds room capacity.')

                total_amount = Booking.calculate_total_amount(
                    price=room.price, check_in=check_in, check_out=check_out
                )
                booking = Booking.create(
                    room_id=room.id,
                    check_in=check_in,
                    check_out=check_out,
                    guests=guests,
                    total_amount=total_amount,
                    contact_info=ContactInfo(phone=phone, address=address),
                    email_address=email_address,
                    guest_name=guest_name,
                    special_requests=special_requests,
                    clock=self.clock,
                    require_email_verification=self.require_email_verification,
                )
                room.add_booking(booking)
                await uow.bookings.add(booking=booking)

                if self.require_email_verification:
                    otp_code = await self.otp_service.generate_otp(
                        otps=uow.otps,
                        booking_id=booking.id,
                        email_address=booking.email_address,
                    )
                    sent = await self.email_sender.send_otp_verification(
                        email_address=booking.email_address,
                        guest_name=booking.guest_name,
                        otp_code=otp_code,
                        booking_id=booking.id,
                    )
                    if not sent:
                        raise InfrastructureError('Failed to send OTP email. Please try again.')
                else:
                    booking = booking.confirm(clock=self.clock)
                    room.replace_booking(booking)
                    await uow.bookings.update(booking=booking)
                    sent = await self.email_sender.send_booking_confirmation(
                        booking=BookingDto.from_entity(booking, room_name=room.name),
                        email_address=booking.email_address,
                        guest_name=booking.guest_name,
                    )
                    if not sent:
                        raise InfrastructureError(
                            'Failed to send booking confirmation email. Please try again.'
                        )

                await uow.commit()

            Logger.base.info(
                f'📝 [CREATE-BOOKING] Booking {booking.id} for room {room_id} '
                f'created as {booking.status}'
            )
            return BookingCreatedDto(
                id=booking.id,
                booking_token=booking.booking_token,
                status=booking.status,
                total_amount=booking.total_amount,
                email_address=booking.email_address,
                requires_email_verification=self.require_email_verification,
            )
