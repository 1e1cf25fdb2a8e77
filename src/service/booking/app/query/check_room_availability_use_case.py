from datetime import datetime
from uuid import UUID

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class CheckRoomAvailabilityUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, room_id: UUID, check_in: datetime, check_out: datetime) -> bool:
        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id)
            if not room:
                raise NotFoundError('Room not found.')
            return room.is_available(check_in, check_out)
