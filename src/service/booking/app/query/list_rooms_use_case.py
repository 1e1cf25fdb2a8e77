from typing import List

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomDto


class ListRoomsUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self) -> List[RoomDto]:
        async with self.uow_factory() as uow:
            rooms = await uow.rooms.list_all()
        return [RoomDto.from_aggregate(room) for room in rooms]
