from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.service.booking.domain.entity.otp_verification_entity import OtpVerification


class IOtpRepo(ABC):
    """Storage for OTP records keyed by (booking_id, email_address)"""

    @abstractmethod
    async def get(self, *, booking_id: UUID, email_address: str) -> Optional[OtpVerification]:
        """Most recently issued record for the key, whatever its state"""
        pass

    @abstractmethod
    async def add(self, *, otp: OtpVerification) -> None:
        pass

    @abstractmethod
    async def update(self, *, otp: OtpVerification) -> None:
        pass

    @abstractmethod
    async def delete(self, *, otp_id: UUID) -> None:
        pass

    @abstractmethod
    async def increment_attempts(self, *, otp_id: UUID) -> int:
        """Atomically add one failed attempt and return the new count"""
        pass

    @abstractmethod
    async def delete_expired(self, *, now: datetime) -> int:
        """
        Remove expired records and return how many were removed

        The newest record of a booking still awaiting verification is kept even
        when expired, so its resend and attempt counters survive cleanup.
        """
        pass
