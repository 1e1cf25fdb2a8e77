from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        """
        `for_update=True` locks the booking row until the transaction ends

        Every write to an existing booking (status change, reschedule, cancel,
        OTP verify and resend) loads it this way, before any room lock.
        """
        pass

    @abstractmethod
    async def get_by_token(self, *, booking_token: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_email(self, *, email_address: str) -> List[Booking]:
        """Bookings of one guest across all rooms, matched case-insensitively"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        pass

    @abstractmethod
    async def add(self, *, booking: Booking) -> None:
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> None:
        pass

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> None:
        pass
