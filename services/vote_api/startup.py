"""
Startup handshake for the Vote API.

The service must not accept requests until MySQL answers a ping. Once it
does, the schema and seed rows are created if they are missing. A failed
ping budget is fatal; a failed schema step is only logged, since after a
successful ping it almost always means the table already exists.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from .database import Database

logger = logging.getLogger(__name__)


@dataclass
class ReadinessResult:
    """Outcome of waiting for the database."""
    ready: bool
    attempts: int
    error: Optional[str] = None


async def wait_for_database(database: Database, retries: int, delay: float) -> ReadinessResult:
    """
    Ping the database until it answers or the retry budget runs out.

    Args:
        database: Database whose pool is used for the ping
        retries: Maximum number of ping attempts
        delay: Seconds to sleep after each failed attempt

    Returns:
        ReadinessResult with ready=True on the first successful ping,
        otherwise ready=False and the last error seen
    """
    last_error = None

    for attempt in range(1, retries + 1):
        try:
            await database.ping()
            logger.info("Database is reachable")
            return ReadinessResult(ready=True, attempts=attempt)
        except Exception as e:
            last_error = str(e)
            logger.info(f"Waiting for database... ({attempt}/{retries})")
            logger.debug(f"Ping failed: {e}")
            await asyncio.sleep(delay)

    return ReadinessResult(ready=False, attempts=retries, error=last_error)


async def initialize_database(database: Database) -> bool:
    """Create the votes table and seed rows; errors are logged, not raised."""
    try:
        await database.create_schema()
        logger.info('Table "votes" is ready.')
        return True
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        return False


async def ensure_ready(database: Database, retries: int, delay: float) -> ReadinessResult:
    """Wait for the database, then initialize the schema if it answered."""
    result = await wait_for_database(database, retries, delay)
    if not result.ready:
        return result

    await initialize_database(database)
    return result
