from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

import attrs

from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.enum.room_status import RoomStatus


@attrs.define(frozen=True)
class RoomDto:
    id: UUID
    name: str
    description: str
    price: Decimal
    capacity: int
    status: RoomStatus
    images: Tuple[str, ...] = ()

    @classmethod
    def from_aggregate(cls, room: Room) -> 'RoomDto':
        return cls(
            id=room.id,
            name=room.name,
            description=room.description,
            price=room.price,
            capacity=room.capacity,
            status=room.status,
            images=tuple(image.file_name for image in room.images),
        )


@attrs.define(frozen=True)
class RoomRevenueDto:
    room_id: UUID
    revenue: Decimal
    projected_revenue: Decimal
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@attrs.define(frozen=True)
class RoomOccupancyDto:
    room_id: UUID
    occupancy_rate: int
    start: datetime
    end: datetime
