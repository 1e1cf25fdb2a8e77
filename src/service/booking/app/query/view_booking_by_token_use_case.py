from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto


class ViewBookingByTokenUseCase:
    """Anonymous lookup: the booking token is the only credential"""

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, booking_token: UUID) -> BookingDto:
        async with self.uow_factory() as uow:
            booking = await uow.bookings.get_by_token(booking_token=booking_token)
            if not booking:
                raise NotFoundError('Booking not found.')

            room = await uow.rooms.get_by_id(room_id=booking.room_id)
            return BookingDto.from_entity(booking, room_name=room.name if room else None)
