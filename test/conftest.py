"""
Test Configuration

This module provides:
- Test environment variables, set before any application module reads settings
- Integration database bootstrap (create test database + alembic upgrade) when
  integration tests are selected

Architecture:
- Unit tests (@pytest.mark.unit): in-memory fakes from test/service/booking/fakes.py
- Integration tests (@pytest.mark.integration): real PostgreSQL, tables truncated per test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are instantiated at import time of src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'hotel_booking_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'hotel_booking_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')
    # Cheapest cost bcrypt accepts
    os.environ.setdefault('OTP_BCRYPT_ROUNDS', '4')


_early_setup_test_environment()

import asyncio  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402


PROJECT_ROOT = Path(__file__).parent.parent


def _is_integration_run(config: pytest.Config) -> bool:
    markexpr = str(config.getoption('markexpr', default='') or '')
    return 'integration' in markexpr and 'not integration' not in markexpr


async def _ensure_test_database() -> None:
    admin_url = settings.DATABASE_URL_ASYNC.replace(f'/{settings.POSTGRES_DB}', '/postgres')
    engine = create_async_engine(admin_url, isolation_level='AUTOCOMMIT')
    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'),
                {'name': settings.POSTGRES_DB},
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE "{settings.POSTGRES_DB}"'))
    finally:
        await engine.dispose()

    reset_engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


def _run_migrations() -> None:
    alembic_cfg = Config(str(PROJECT_ROOT / 'alembic.ini'))
    alembic_cfg.attributes['configure_logger'] = False
    alembic_cfg.set_main_option('sqlalchemy.url', settings.DATABASE_URL_ASYNC)
    command.upgrade(alembic_cfg, 'head')


def pytest_sessionstart(session: pytest.Session) -> None:
    if not _is_integration_run(session.config):
        return

    asyncio.run(_ensure_test_database())
    _run_migrations()
