from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7


DEFAULT_OTP_TTL = timedelta(minutes=15)


def normalize_email(email_address: str) -> str:
    return email_address.strip().lower()


@attrs.define(frozen=True)
class OtpVerification:
    """
    Hashed one-time passcode issued for one (booking, email) pair.

    Only the hash is ever stored. A record stays usable until it expires,
    is invalidated after a successful verification, or is superseded by a
    newer code for the same key.
    """

    id: UUID
    booking_id: UUID
    email_address: str
    code_hash: str
    created_at: datetime
    expires_at: datetime
    attempt_count: int = 0
    resend_count: int = 0
    invalidated: bool = False
    invalidated_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls,
        *,
        booking_id: UUID,
        email_address: str,
        code_hash: str,
        now: datetime,
        ttl: timedelta = DEFAULT_OTP_TTL,
        resend_count: int = 0,
    ) -> 'OtpVerification':
        return cls(
            id=uuid7(),
            booking_id=booking_id,
            email_address=normalize_email(email_address),
            code_hash=code_hash,
            created_at=now,
            expires_at=now + ttl,
            resend_count=resend_count,
        )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_active(self, now: datetime) -> bool:
        return not self.invalidated and not self.is_expired(now)

    def has_exceeded_attempts(self, max_attempts: int) -> bool:
        return self.attempt_count >= max_attempts

    def with_attempt(self) -> 'OtpVerification':
        return attrs.evolve(self, attempt_count=self.attempt_count + 1)

    def invalidate(self, now: datetime) -> 'OtpVerification':
        if self.invalidated:
            return self
        return attrs.evolve(self, invalidated=True, invalidated_at=now)
