#!/usr/bin/env python3
"""
Expired OTP Cleanup Script
Delete OTP verification records whose expiry has passed

Intended to run periodically (cron / scheduled task); it is never part of a
request path. Exits non-zero when the cleanup fails.
"""

import asyncio
import sys

from src.platform.config.di import cleanup, container, setup
from src.platform.logging.loguru_io import Logger
from src.platform.logging.service_context import get_service_name
from src.platform.observability.tracing import TracingConfig


async def main() -> int:
    setup()
    tracing = TracingConfig(service_name=get_service_name())
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=container.database().engine)

    try:
        result = await container.booking_orchestrator().cleanup_expired_otps()
    finally:
        await cleanup()
        tracing.shutdown()

    if not result.success:
        Logger.base.error(f'❌ OTP cleanup failed: {result.message}')
        return 1

    Logger.base.info(f'✅ OTP cleanup finished, {result.data} records removed')
    return 0


if __name__ == '__main__':
    sys.exit(asyncio.run(main()))
