from decimal import Decimal
from typing import Iterable

from src.platform.clock.clock import IClock
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.room_dto import RoomDto
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.value_object.room_image import RoomImage


class CreateRoomUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: IClock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @Logger.io
    async def execute(
        self,
        *,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Iterable[str] = (),
    ) -> RoomDto:
        room = Room.create(
            name=name,
            description=description,
            price=price,
            capacity=capacity,
            images=[RoomImage(file_name=file_name) for file_name in images],
            clock=self.clock,
        )
        async with self.uow_factory() as uow:
            await uow.rooms.add(room=room)
            await uow.commit()

        Logger.base.info(f'🏨 [CREATE-ROOM] Room {room.id} "{room.name}" created')
        return RoomDto.from_aggregate(room)
