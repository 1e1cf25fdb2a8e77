from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomDto


class GetRoomUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, room_id: UUID) -> RoomDto:
        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id)

        if not room:
            raise NotFoundError('Room not found.')
        return RoomDto.from_aggregate(room)
