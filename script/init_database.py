#!/usr/bin/env python3
"""
Database Init Script
Bring the schema (room, booking, otp_verification) up to the latest migration

Notes:
- Safe to run repeatedly; applied revisions are skipped
- Does not seed data
"""

from alembic import command
from alembic.config import Config

from src.platform.constant.path import BASE_DIR
from src.platform.logging.loguru_io import Logger


ALEMBIC_INI = BASE_DIR / 'alembic.ini'


def main() -> None:
    alembic_cfg = Config(str(ALEMBIC_INI))
    # Keep loguru's intercept handler instead of alembic's logging config
    alembic_cfg.attributes['configure_logger'] = False
    command.upgrade(alembic_cfg, 'head')
    Logger.base.info('✅ Database schema is up to date')


if __name__ == '__main__':
    main()
