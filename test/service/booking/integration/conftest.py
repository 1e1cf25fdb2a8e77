"""
Integration fixtures: a fresh DI container per test wired to the PostgreSQL
test database, with the clock pinned and mail kept in memory.
"""

from typing import AsyncGenerator

from dependency_injector import providers
import pytest_asyncio
from sqlalchemy import text

from src.platform.clock.clock import FixedClock
from src.platform.config.di import Container
from src.platform.database.orm_db_setting import Database
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender


_TABLES = ('otp_verification', 'booking', 'room')


@pytest_asyncio.fixture
async def container(clock: FixedClock) -> AsyncGenerator[Container, None]:
    container = Container()
    container.clock.override(providers.Object(clock))
    container.email_sender.override(providers.Singleton(MockEmailSender, debug=False))

    database: Database = container.database()
    async with database.session() as session:
        await session.execute(text(f'TRUNCATE {", ".join(_TABLES)} CASCADE'))
        await session.commit()

    yield container

    await database.dispose()
    container.reset_singletons()


@pytest_asyncio.fixture
async def database(container: Container) -> Database:
    return container.database()
