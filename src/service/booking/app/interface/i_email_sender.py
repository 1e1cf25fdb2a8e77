from abc import ABC, abstractmethod
from uuid import UUID

from src.service.booking.app.dto.booking_dto import BookingDto


class IEmailSender(ABC):
    """
    Outbound guest notifications

    Every method reports delivery with a bool; a False return is treated by
    the use cases as a failed operation and rolls the transaction back.
    """

    @abstractmethod
    async def send_otp_verification(
        self, *, email_address: str, guest_name: str, otp_code: str, booking_id: UUID
    ) -> bool:
        pass

    @abstractmethod
    async def send_booking_confirmation(
        self, *, booking: BookingDto, email_address: str, guest_name: str
    ) -> bool:
        pass

    @abstractmethod
    async def send_booking_cancellation(
        self, *, booking: BookingDto, email_address: str, guest_name: str
    ) -> bool:
        pass

    @abstractmethod
    async def send_booking_update(
        self, *, booking: BookingDto, email_address: str, guest_name: str, update_type: str
    ) -> bool:
        pass
