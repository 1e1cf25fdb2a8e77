from typing import List

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDto


class ListBookingsByEmailUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, email_address: str) -> List[BookingDto]:
        if not email_address or not email_address.strip():
            raise DomainError('Email address is required.')

        async with self.uow_factory() as uow:
            bookings = await uow.bookings.list_by_email(email_address=email_address)
        return [BookingDto.from_entity(booking) for booking in bookings]
