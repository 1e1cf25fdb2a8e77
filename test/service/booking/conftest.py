"""
Shared fixtures for booking tests

Everything runs against the in-memory store and a FixedClock pinned to NOW,
so date rules are deterministic.
"""

from typing import Callable

import pytest

from src.platform.clock.clock import FixedClock
from src.service.booking.app.service.otp_verification_service import OtpVerificationService
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender
from test.service.booking.builders import NOW, make_room
from test.service.booking.fakes import InMemoryStore, InMemoryUnitOfWork, PlainOtpHasher


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore) -> Callable[[], InMemoryUnitOfWork]:
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def email_sender() -> MockEmailSender:
    return MockEmailSender(debug=False)


@pytest.fixture
def otp_service(clock: FixedClock) -> OtpVerificationService:
    return OtpVerificationService(hasher=PlainOtpHasher(), clock=clock)


@pytest.fixture
def room(store: InMemoryStore) -> Room:
    return store.seed_room(make_room())
