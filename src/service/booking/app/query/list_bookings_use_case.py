from typing import List

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto


class ListBookingsUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self) -> List[BookingDto]:
        async with self.uow_factory() as uow:
            bookings = await uow.bookings.list_all()
        return [BookingDto.from_entity(booking) for booking in bookings]
