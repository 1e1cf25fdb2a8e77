from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomDto
from src.service.booking.domain.value_object.room_image import RoomImage


class UpdateRoomUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: IClock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @Logger.io
    async def execute(
        self,
        *,
        room_id: UUID,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Optional[Iterable[str]] = None,
    ) -> RoomDto:
        """
        Replace room details

        `images=None` keeps the current gallery; any iterable replaces it.
        Existing bookings keep the amount they were priced at.
        """
        async with self.uow_factory() as uow:
            room = await uow.rooms.get_by_id(room_id=room_id, for_update=True)
            if not room:
                raise NotFoundError('Room not found.')

            room.update_details(
                name=name,
                description=description,
                price=price,
                capacity=capacity,
                images=None
                if images is None
                else [RoomImage(file_name=file_name) for file_name in images],
                clock=self.clock,
            )
            await uow.rooms.update(room=room)
            await uow.commit()

        return RoomDto.from_aggregate(room)
