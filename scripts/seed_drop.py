"""
Schedule a demo drop so the countdown and simulated queue growth show up.

Usage:
    uv run python scripts/seed_drop.py [minutes_from_now]
"""

import asyncio
import sys
from datetime import timedelta

from app.storage import DatabaseStorage
from core.config import config
from core.db import async_session_factory, utcnow
from core.logging import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_MINUTES_AHEAD = 30


async def seed_drop(minutes_ahead: int = DEFAULT_MINUTES_AHEAD) -> None:
    """Create an active drop ``minutes_ahead`` minutes from now."""
    async with async_session_factory() as session:
        storage = DatabaseStorage(session)
        drop = await storage.create_drop(
            name="LOCKS SOLD Exclusive Drop",
            description="Limited edition collection - Don't miss out!",
            drop_time=utcnow() + timedelta(minutes=minutes_ahead),
            is_active=True,
            max_queue_size=config.MAX_SIMULATED_QUEUE_SIZE,
        )
        logger.info(f"Seeded drop {drop.id} at {drop.drop_time.isoformat()}")


async def main():
    setup_logging()
    minutes = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_MINUTES_AHEAD
    await seed_drop(minutes)


if __name__ == "__main__":
    asyncio.run(main())
