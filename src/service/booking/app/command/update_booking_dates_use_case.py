from datetime import datetime
from uuid import UUID

from opentelemetry import trace

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import InfrastructureError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.app.interface.i_email_sender import IEmailSender


class UpdateBookingDatesUseCase:
    """
    Move an unconfirmed booking to new dates

    Availability is re-checked against the room's other bookings under the
    room row lock. The amount charged at creation is kept.
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
        self, *, booking_id: UUID, check_in: datetime, check_out: datetime
    ) -> BookingDto:
        with self.tracer.start_as_current_span(
            'use_case.update_booking_dates',
            attributes={'booking.id': str(booking_id)},
        ):
            async with self.uow_factory() as uow:
                booking = await uow.bookings.get_by_id(booking_id=booking_id, for_update=True)
                if not booking:
                    raise NotFoundError('Booking not found.')

                room = await uow.rooms.get_by_id(room_id=booking.room_id, for_update=True)
                if not room:
                    raise NotFoundError('Room not found.')

                updated = room.reschedule_booking(
                    booking_id=booking_id,
                    check_in=check_in,
                    check_out=check_out,
                    clock=self.clock,
                )
                await uow.bookings.update(booking=updated)

                dto = BookingDto.from_entity(updated, room_name=room.name)
                sent = await self.email_sender.send_booking_update(
                    booking=dto,
                    email_address=updated.email_address,
                    guest_name=updated.guest_name,
                    update_type='dates_changed',
                )
                if not sent:
                    raise InfrastructureError('Failed to send booking update email. Please try again.')

                await uow.commit()

            return dto
