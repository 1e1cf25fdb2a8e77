from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_room_repo import IRoomRepo
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.room_status import RoomStatus
from src.service.booking.domain.value_object.room_image import RoomImage
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.room_model import RoomModel
from src.service.booking.driven_adapter.repo.booking_repo_impl import booking_to_entity


class RoomRepoImpl(IRoomRepo):
    """
    Loads and stores the Room aggregate

    Owned bookings are read together with the room; they are written through
    the booking repository so each booking row changes independently.
    """

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_aggregate(db_room: RoomModel, bookings: List[Booking]) -> Room:
        return Room.rehydrate(
            id=db_room.id,
            name=db_room.name,
            description=db_room.description or '',
            price=db_room.price,
            capacity=db_room.capacity,
            status=RoomStatus(db_room.status),
            images=tuple(RoomImage(file_name=name) for name in db_room.images or []),
            created_at=db_room.created_at,
            updated_at=db_room.updated_at,
            bookings=bookings,
        )

    @staticmethod
    def _columns(room: Room) -> dict:
        return {
            'name': room.name,
            'description': room.description,
            'price': room.price,
            'capacity': room.capacity,
            'status': room.status.value,
            'images': [image.file_name for image in room.images],
            'updated_at': room.updated_at,
        }

    @Logger.io
    async def get_by_id(self, *, room_id: UUID, for_update: bool = False) -> Optional[Room]:
        stmt = select(RoomModel).where(RoomModel.id == room_id)
        if for_update:
            # Row lock on the room serializes availability checks for it
            stmt = stmt.with_for_update()
        db_room = (await self.session.execute(stmt)).scalar_one_or_none()
        if not db_room:
            return None

        result = await self.session.execute(
            select(BookingModel).where(BookingModel.room_id == room_id)
        )
        bookings = [booking_to_entity(row) for row in result.scalars().all()]
        return self._to_aggregate(db_room, bookings)

    @Logger.io
    async def list_all(self) -> List[Room]:
        rooms = (await self.session.execute(select(RoomModel).order_by(RoomModel.name))).scalars()
        db_rooms = rooms.all()
        if not db_rooms:
            return []

        result = await self.session.execute(
            select(BookingModel).where(BookingModel.room_id.in_([r.id for r in db_rooms]))
        )
        bookings_by_room: Dict[UUID, List[Booking]] = defaultdict(list)
        for row in result.scalars().all():
            bookings_by_room[row.room_id].append(booking_to_entity(row))

        return [self._to_aggregate(db_room, bookings_by_room[db_room.id]) for db_room in db_rooms]

    @Logger.io
    async def add(self, *, room: Room) -> None:
        self.session.add(RoomModel(id=room.id, created_at=room.created_at, **self._columns(room)))
        await self.session.flush()

    @Logger.io
    async def update(self, *, room: Room) -> None:
        await self.session.execute(
            update(RoomModel).where(RoomModel.id == room.id).values(**self._columns(room))
        )

    @Logger.io
    async def delete(self, *, room_id: UUID) -> None:
        await self.session.execute(delete(BookingModel).where(BookingModel.room_id == room_id))
        await self.session.execute(delete(RoomModel).where(RoomModel.id == room_id))
