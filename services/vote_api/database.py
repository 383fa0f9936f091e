"""MySQL connection pool and vote queries."""
import logging
from typing import Dict, Optional

import aiomysql

from .config import Settings
from .models import Category

logger = logging.getLogger(__name__)


CREATE_TABLE_QUERY = """
    CREATE TABLE IF NOT EXISTS votes (
        animal VARCHAR(10) PRIMARY KEY,
        count INT DEFAULT 0
    )
"""

INCREMENT_QUERY = "UPDATE votes SET count = count + 1 WHERE animal = %s"

SELECT_TALLIES_QUERY = "SELECT animal, count FROM votes"


class DatabaseNotConnectedError(Exception):
    """Raised when a query is issued before the pool exists."""
    pass


def seed_query() -> str:
    """INSERT IGNORE with one placeholder row per category."""
    rows = ", ".join("(%s, 0)" for _ in Category)
    return f"INSERT IGNORE INTO votes (animal, count) VALUES {rows}"


class Database:
    """Async MySQL database manager."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[aiomysql.Pool] = None

    async def connect(self):
        """
        Create the connection pool.

        The pool starts empty, so this succeeds even while the database is
        still coming up; connections are opened on first acquire.
        """
        self.pool = await aiomysql.create_pool(
            minsize=0,
            maxsize=self.settings.DB_POOL_SIZE,
            autocommit=True,
            **self.settings.connection_kwargs
        )
        logger.info(
            f"MySQL connection pool created: "
            f"{self.settings.DB_HOST}:{self.settings.DB_PORT}/{self.settings.DB_NAME}"
        )

    def _require_pool(self) -> aiomysql.Pool:
        if self.pool is None:
            raise DatabaseNotConnectedError("Database pool has not been created")
        return self.pool

    async def ping(self):
        """Round-trip to the server without touching any table."""
        async with self._require_pool().acquire() as conn:
            await conn.ping(reconnect=False)

    async def create_schema(self):
        """Create the votes table and seed one row per category if absent."""
        try:
            async with self._require_pool().acquire() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(CREATE_TABLE_QUERY)
                    await cur.execute(seed_query(), [c.value for c in Category])
        except Exception as e:
            logger.error(f"Error creating schema: {e}")
            raise

    async def increment(self, category: Category):
        """
        Add one vote for a category.

        The increment runs as a single statement so concurrent votes are
        never lost.

        Args:
            category: Category receiving the vote
        """
        try:
            async with self._require_pool().acquire() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(INCREMENT_QUERY, (category.value,))
        except Exception as e:
            logger.error(f"Error recording vote for {category.value}: {e}")
            raise

    async def get_tallies(self) -> Dict[str, int]:
        """
        Get vote counts for every category row in the table.

        Returns:
            Mapping of category name to count; missing rows are absent
        """
        try:
            async with self._require_pool().acquire() as conn:
                async with conn.cursor(aiomysql.DictCursor) as cur:
                    await cur.execute(SELECT_TALLIES_QUERY)
                    rows = await cur.fetchall()
                    return {row["animal"]: row["count"] for row in rows}
        except Exception as e:
            logger.error(f"Error getting tallies: {e}")
            raise

    async def check_health(self) -> bool:
        """Check database connection health."""
        try:
            await self.ping()
            return True
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    async def close(self):
        """Close database connection pool."""
        try:
            if self.pool:
                self.pool.close()
                await self.pool.wait_closed()
                self.pool = None
                logger.info("MySQL connection pool closed successfully")
        except Exception as e:
            logger.error(f"Error closing MySQL connection pool: {e}")
