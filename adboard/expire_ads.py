"""Expiration job — one mark_expired_ads sweep for cron-style scheduling.

Invariants:
    - Safe to run repeatedly: a second run with nothing newly expired affects 0 rows
    - Exit code 0 on success; DatabaseError propagates (non-zero exit)

Design Decisions:
    - Uses db/session.py's plain session factory, not the API's pooled manager
"""

import asyncio
import logging

from adboard.config import get_settings
from adboard.db.session import create_session_factory
from adboard.infrastructure.observability import setup_logging
from adboard.infrastructure.repositories import SqlAdRepository
from adboard.services.ad_status_machine import AdStatusMachine

logger = logging.getLogger(__name__)


async def run_sweep(database_url: str) -> int:
    """Expire overdue PUBLISHED ads. Returns the number of ads affected."""
    session_factory = create_session_factory(database_url)
    try:
        async with session_factory() as session:
            machine = AdStatusMachine(SqlAdRepository(session))
            return await machine.mark_expired_ads()
    finally:
        await session_factory.kw["bind"].dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    affected = asyncio.run(run_sweep(settings.database_url))
    logger.info(f"Expiration sweep done: {affected} ad(s) expired", extra={"affected": affected})


if __name__ == "__main__":
    main()
