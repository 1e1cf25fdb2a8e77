"""
OTP verification service

Issues, checks and retires the one-time passcodes that gate booking
confirmation. Codes are only ever stored hashed. Every method works on the
OTP repository of the caller's unit of work, so OTP writes commit or roll
back together with the booking change that triggered them.

Counters:
- attempt_count: failed validations of the current code (reset by a new code)
- resend_count: codes issued through resend requests for the key
"""

from datetime import timedelta
import secrets
from typing import Optional
from uuid import UUID

from src.platform.clock.clock import IClock
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_otp_hasher import IOtpHasher
from src.service.booking.app.interface.i_otp_repo import IOtpRepo
from src.service.booking.domain.entity.otp_verification_entity import (
    OtpVerification,
    normalize_email,
)


class OtpVerificationService:
    def __init__(
        self,
        *,
        hasher: IOtpHasher,
        clock: IClock,
        otp_length: int = 6,
        expiration_minutes: int = 15,
        max_attempts: int = 5,
        max_resends: int = 3,
    ) -> None:
        self.hasher = hasher
        self.clock = clock
        self.otp_length = otp_length
        self.ttl = timedelta(minutes=expiration_minutes)
        self.max_attempts = max_attempts
        self.max_resends = max_resends

    def _new_code(self) -> str:
        # Always exactly otp_length digits, never a leading zero
        lower = 10 ** (self.otp_length - 1)
        return str(lower + secrets.randbelow(9 * lower))

    async def _current(
        self, otps: IOtpRepo, booking_id: UUID, email_address: str
    ) -> Optional[OtpVerification]:
        return await otps.get(booking_id=booking_id, email_address=normalize_email(email_address))

    @Logger.io(mask_return=True)
    async def generate_otp(
        self,
        *,
        otps: IOtpRepo,
        booking_id: UUID,
        email_address: str,
        is_resend: bool = False,
    ) -> str:
        """
        Issue a fresh code for the key and return it in plaintext for delivery

        Any earlier record for the key is invalidated first, so at most one
        record is ever active.
        """
        now = self.clock.now()
        previous = await self._current(otps, booking_id, email_address)

        resend_count = 0
        if previous is not None:
            if is_resend:
                resend_count = previous.resend_count + 1
            if not previous.invalidated:
                await otps.update(otp=previous.invalidate(now))

        otp_code = self._new_code()
        record = OtpVerification.issue(
            booking_id=booking_id,
            email_address=email_address,
            code_hash=self.hasher.hash_code(code=otp_code),
            now=now,
            ttl=self.ttl,
            resend_count=resend_count,
        )
        await otps.add(otp=record)
        Logger.base.info(
            f'🔐 [OTP] Issued code for booking {booking_id} '
            f'(resend #{resend_count}, expires {record.expires_at.isoformat()})'
        )
        return otp_code

    @Logger.io
    async def validate_otp(
        self, *, otps: IOtpRepo, booking_id: UUID, otp_code: str, email_address: str
    ) -> bool:
        """Check a submitted code; never changes stored state"""
        record = await self._current(otps, booking_id, email_address)
        if record is None or not record.is_active(self.clock.now()):
            return False
        if not otp_code or not otp_code.strip():
            return False
        return self.hasher.verify_code(code=otp_code.strip(), code_hash=record.code_hash)

    @Logger.io
    async def increment_otp_attempts(
        self, *, otps: IOtpRepo, booking_id: UUID, email_address: str
    ) -> int:
        record = await self._current(otps, booking_id, email_address)
        if record is None:
            Logger.base.warning(f'⚠️ [OTP] No OTP on record for booking {booking_id}')
            return 0
        return await otps.increment_attempts(otp_id=record.id)

    @Logger.io
    async def get_otp_attempts(
        self, *, otps: IOtpRepo, booking_id: UUID, email_address: str
    ) -> int:
        record = await self._current(otps, booking_id, email_address)
        return record.attempt_count if record else 0

    @Logger.io
    async def get_resend_count(
        self, *, otps: IOtpRepo, booking_id: UUID, email_address: str
    ) -> int:
        record = await self._current(otps, booking_id, email_address)
        return record.resend_count if record else 0

    @Logger.io
    async def invalidate_otp(
        self, *, otps: IOtpRepo, booking_id: UUID, email_address: str
    ) -> bool:
        record = await self._current(otps, booking_id, email_address)
        if record is None or record.invalidated:
            return False
        await otps.update(otp=record.invalidate(self.clock.now()))
        return True

    @Logger.io
    async def otp_exists(self, *, otps: IOtpRepo, booking_id: UUID, email_address: str) -> bool:
        record = await self._current(otps, booking_id, email_address)
        return record is not None and record.is_active(self.clock.now())

    def has_exceeded_attempts(self, attempt_count: int) -> bool:
        return attempt_count >= self.max_attempts

    def has_exceeded_resends(self, resend_count: int) -> bool:
        return resend_count >= self.max_resends

    @Logger.io
    async def delete_expired(self, *, otps: IOtpRepo) -> int:
        deleted = await otps.delete_expired(now=self.clock.now())
        Logger.base.info(f'🧹 [OTP] Removed {deleted} expired OTP records')
        return deleted
