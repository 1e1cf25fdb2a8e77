from uuid import UUID

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteRoomUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: IClock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @Logger.io
    async def execute(self, *, room_id: UUID) -> None:
        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id, for_update=True)
            if not room:
                raise NotFoundError('Room not found.')

            room.ensure_can_be_deleted(self.clock.now())
            await uow.rooms.delete(room_id=room_id)
            await uow.commit()

        Logger.base.info(f'🗑️ [DELETE-ROOM] Room {room_id} deleted')
