from datetime import datetime
from typing import Optional
from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomRevenueDto


class GetRoomRevenueUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(
        self,
        *,
        room_id: UUID,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> RoomRevenueDto:
        if start is not None and end is not None and start > end:
            raise DomainError('Start date must not be after end date.')

        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id)
            if not room:
                raise NotFoundError('Room not found.')

            return RoomRevenueDto(
                room_id=room.id,
                revenue=room.calculate_revenue(start, end),
                projected_revenue=room.calculate_projected_revenue(start, end),
                start=start,
                end=end,
            )
