from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.booking.domain.aggregate.room_aggregate import Room


class IRoomRepo(ABC):
    """Repository interface for the Room aggregate (room row + owned bookings)"""

    @abstractmethod
    async def get_by_id(self, *, room_id: UUID, for_update: bool = False) -> Optional[Room]:
        """
        Load a room with all of its bookings

        `for_update=True` locks the room row until the transaction ends, so two
        writers checking availability for the same room run one after the other.
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Room]:
        pass

    @abstractmethod
    async def add(self, *, room: Room) -> None:
        pass

    @abstractmethod
    async def update(self, *, room: Room) -> None:
        """Persist room details and status (bookings are written via IBookingRepo)"""
        pass

    @abstractmethod
    async def delete(self, *, room_id: UUID) -> None:
        pass
