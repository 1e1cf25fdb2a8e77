from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_otp_repo import IOtpRepo
from src.service.booking.domain.entity.otp_verification_entity import (
    OtpVerification,
    normalize_email,
)
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.otp_verification_model import (
    OtpVerificationModel,
)


class OtpRepoImpl(IOtpRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(row: OtpVerificationModel) -> OtpVerification:
        return OtpVerification(
            id=row.id,
            booking_id=row.booking_id,
            email_address=row.email_address,
            code_hash=row.code_hash,
            created_at=row.created_at,
            expires_at=row.expires_at,
            attempt_count=row.attempt_count,
            resend_count=row.resend_count,
            invalidated=row.invalidated,
            invalidated_at=row.invalidated_at,
        )

    @Logger.io
    async def get(self, *, booking_id: UUID, email_address: str) -> Optional[OtpVerification]:
        result = await self.session.execute(
            select(OtpVerificationModel)
            .where(
                OtpVerificationModel.booking_id == booking_id,
                OtpVerificationModel.email_address == normalize_email(email_address),
            )
            .order_by(OtpVerificationModel.created_at.desc(), OtpVerificationModel.id.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return self._to_entity(row) if row else None

    @Logger.io
    async def add(self, *, otp: OtpVerification) -> None:
        self.session.add(
            OtpVerificationModel(
                id=otp.id,
                booking_id=otp.booking_id,
                email_address=otp.email_address,
                code_hash=otp.code_hash,
                created_at=otp.created_at,
                expires_at=otp.expires_at,
                attempt_count=otp.attempt_count,
                resend_count=otp.resend_count,
                invalidated=otp.invalidated,
                invalidated_at=otp.invalidated_at,
            )
        )
        await self.session.flush()

    @Logger.io
    async def update(self, *, otp: OtpVerification) -> None:
        # attempt_count is owned by increment_attempts and never overwritten here
        await self.session.execute(
            update(OtpVerificationModel)
            .where(OtpVerificationModel.id == otp.id)
            .values(
                code_hash=otp.code_hash,
                expires_at=otp.expires_at,
                resend_count=otp.resend_count,
                invalidated=otp.invalidated,
                invalidated_at=otp.invalidated_at,
            )
        )

    @Logger.io
    async def delete(self, *, otp_id: UUID) -> None:
        await self.session.execute(
            delete(OtpVerificationModel).where(OtpVerificationModel.id == otp_id)
        )

    @Logger.io
    async def increment_attempts(self, *, otp_id: UUID) -> int:
        result = await self.session.execute(
            update(OtpVerificationModel)
            .where(OtpVerificationModel.id == otp_id)
            .values(attempt_count=OtpVerificationModel.attempt_count + 1)
            .returning(OtpVerificationModel.attempt_count)
        )
        return result.scalar_one()

    @Logger.io
    async def delete_expired(self, *, now: datetime) -> int:
        latest_per_key = (
            select(OtpVerificationModel.id)
            .distinct(OtpVerificationModel.booking_id, OtpVerificationModel.email_address)
            .order_by(
                OtpVerificationModel.booking_id,
                OtpVerificationModel.email_address,
                OtpVerificationModel.created_at.desc(),
                OtpVerificationModel.id.desc(),
            )
            .correlate(None)
        )
        awaiting_verification = select(BookingModel.id).where(
            BookingModel.status == BookingStatus.EMAIL_VERIFICATION_PENDING.value
        )
        # The latest record of a booking still awaiting verification carries its counters
        result = await self.session.execute(
            delete(OtpVerificationModel)
            .where(
                OtpVerificationModel.expires_at < now,
                or_(
                    OtpVerificationModel.id.not_in(latest_per_key),
                    OtpVerificationModel.booking_id.not_in(awaiting_verification),
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
