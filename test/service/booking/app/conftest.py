import pytest

from src.service.booking.app.booking_orchestrator import BookingOrchestrator
from test.service.booking.app.wiring import build_orchestrator


@pytest.fixture
def orchestrator(uow_factory, otp_service, email_sender, clock) -> BookingOrchestrator:
    return build_orchestrator(
        uow_factory=uow_factory, otp_service=otp_service, email_sender=email_sender, clock=clock
    )


@pytest.fixture
def direct_orchestrator(uow_factory, otp_service, email_sender, clock) -> BookingOrchestrator:
    """OTP gate off: bookings are confirmed on creation"""
    return build_orchestrator(
        uow_factory=uow_factory,
        otp_service=otp_service,
        email_sender=email_sender,
        clock=clock,
        require_email_verification=False,
    )
