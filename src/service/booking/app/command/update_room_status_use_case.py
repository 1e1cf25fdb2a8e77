from uuid import UUID

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomDto
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.enum.room_status import RoomStatus


class UpdateRoomStatusUseCase:
    """Only the operator-controlled statuses can be set; Occupied/Booked are derived elsewhere"""

    _TRANSITIONS = {
        RoomStatus.AVAILABLE: Room.activate,
        RoomStatus.INACTIVE: Room.deactivate,
        RoomStatus.MAINTENANCE: Room.set_maintenance,
    }

    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: IClock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @Logger.io
    async def execute(self, *, room_id: UUID, status: RoomStatus) -> RoomDto:
        transition = self._TRANSITIONS.get(status)
        if transition is None:
            raise DomainError(
                'Invalid status update. Only Available, Inactive, and Maintenance are allowed.'
            )

        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id, for_update=True)
            if not room:
                raise NotFoundError('Room not found.')

            transition(room, clock=self.clock)
            await uow.rooms.update(room=room)
            await uow.commit()

        return RoomDto.from_aggregate(room)
