from datetime import datetime
from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomOccupancyDto


class GetRoomOccupancyRateUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, room_id: UUID, start: datetime, end: datetime) -> RoomOccupancyDto:
        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id)
            if not room:
                raise NotFoundError('Room not found.')

            return RoomOccupancyDto(
                room_id=room.id,
                occupancy_rate=room.get_occupancy_rate(start, end),
                start=start,
                end=end,
            )
