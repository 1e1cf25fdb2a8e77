from uuid import UUID

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus


class UpdateBookingStatusUseCase:
    """Staff-driven status change, mapped onto the booking's lifecycle methods"""

    _TRANSITIONS = {
        BookingStatus.CONFIRMED: Booking.confirm,
        BookingStatus.CANCELLED: Booking.cancel,
        BookingStatus.CHECKED_IN: Booking.check_in_guest,
        BookingStatus.CHECKED_OUT: Booking.check_out_guest,
        BookingStatus.COMPLETED: Booking.complete,
    }

    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: IClock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @Logger.io
    async def execute(self, *, booking_id: UUID, new_status: BookingStatus) -> BookingDto:
        transition = self._TRANSITIONS.get(new_status)
        if transition is None:
            raise DomainError('Unsupported or invalid status transition.')

        async with self.uow_factory() as uow:
            booking = await uow.bookings.get_by_id(booking_id=booking_id, for_update=True)
            if not booking:
                raise NotFoundError('Booking not found.')

            updated = transition(booking, clock=self.clock)
            await uow.bookings.update(booking=updated)
            await uow.commit()

        Logger.base.info(f'🔄 [BOOKING-STATUS] {booking_id}: {booking.status} -> {updated.status}')
        return BookingDto.from_entity(updated)
