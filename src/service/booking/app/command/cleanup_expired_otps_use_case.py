from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.service.otp_verification_service import OtpVerificationService


class CleanupExpiredOtpsUseCase:
    """Housekeeping: drop OTP records past their expiry. Not on any request path."""

    def __init__(
        self, *, uow_factory: UnitOfWorkFactory, otp_service: OtpVerificationService
    ) -> None:
        self.uow_factory = uow_factory
        self.otp_service = otp_service

    @Logger.io
    async def execute(self) -> int:
        async with self.uow_factory() as uow:
            deleted = await self.otp_service.delete_expired(otps=uow.otps)
            await uow.commit()
        return deleted
