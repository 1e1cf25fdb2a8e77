from typing import Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import ForbiddenError, InfrastructureError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.app.interface.i_email_sender import IEmailSender
from src.service.booking.domain.entity.otp_verification_entity import normalize_email


class CancelBookingUseCase:
    """
    Cancel a booking

    Authorization:
    - Guests identify themselves with the booking's email address; a mismatch is refused (403)
    - Staff callers pass no email address

    The cancellation email is part of the transaction; if it cannot be sent
    the booking stays as it was.
    """

    def __init__(
        self, *, uow_factory: UnitOfWorkFactory, email_sender: IEmailSender, clock: IClock
    ) -> None:
        self.uow_factory = uow_factory
        self.email_sender = email_sender
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, email_address: Optional[str] = None
    ) -> BookingDto:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id)},
        ):
            async with self.uow_factory() as uow:
                booking = await uow.bookings.get_by_id(booking_id=booking_id, for_update=True)
                if not booking:
                    raise NotFoundError('Booking not found.')

                if email_address is not None and normalize_email(email_address) != normalize_email(
                    booking.email_address
                ):
                    raise ForbiddenError('You are not authorized to cancel this booking.')

                cancelled = booking.cancel(clock=self.clock)
                await uow.bookings.update(booking=cancelled)

                dto = BookingDto.from_entity(cancelled)
                sent = await self.email_sender.send_booking_cancellation(
                    booking=dto,
                    email_address=cancelled.email_address,
                    guest_name=cancelled.guest_name,
                )
                if not sent:
                    raise InfrastructureError('Failed to send cancellation email. Please try again.')

                await uow.commit()

            return dto
