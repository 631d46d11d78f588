"""Run the expiration and completion sweeps once, then exit.

Intended for cron (e.g. every 15 minutes)::

    */15 * * * * cd /srv/booking-engine/backend && python -m scripts.run_sweeps
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from booking_engine.database import async_session_factory, engine, utcnow
from booking_engine.services.expiration_service import run_completion_sweep, run_expiration_sweep

logger = logging.getLogger("scripts.run_sweeps")


async def main() -> int:
    now = utcnow()
    try:
        async with async_session_factory() as session:
            try:
                expired = await run_expiration_sweep(session, now)
                completed = await run_completion_sweep(session, now.date())
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception("Sweep run failed")
                return 1
    finally:
        await engine.dispose()

    logger.info("Sweeps done: %d expired, %d completed", len(expired), len(completed))
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(main()))
