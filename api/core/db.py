"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. The app builds one instance on startup,
keeps it on `app.state` and closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from .config import Settings

logger = logging.getLogger(__name__)

# Anything the driver or the network can raise while talking to the store.
STORE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class Database:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._pool: asyncpg.Pool | None = None

    async def open(self) -> None:
        if self._pool is not None:
            return None
        s = self._settings
        self._pool = await asyncpg.create_pool(
            host=s.db_host,
            port=s.db_port,
            user=s.db_user,
            password=s.db_password or None,
            database=s.db_database,
            min_size=1,
            max_size=s.db_pool_max_size,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call open() on startup.")
        return self._pool

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Any]:
        """
        Borrow one connection for the duration of the block.

        Waits (no timeout) when every connection is in use. The connection goes
        back to the pool exactly once, whatever happens inside the block.
        """
        pool = self.pool
        conn = await pool.acquire()
        try:
            yield conn
        finally:
            await pool.release(conn)

    async def check_connection(self) -> bool:
        """
        Startup probe: open the pool and run a trivial query on one connection.
        """
        logger.info("Waiting for database connection...")
        try:
            await self.open()
            async with self.connection() as conn:
                await conn.fetchval("SELECT 1 + 1 AS test")
        except STORE_ERRORS as exc:
            logger.error(
                "database_connection_failed host=%s port=%s database=%s error=%s",
                self._settings.db_host,
                self._settings.db_port,
                self._settings.db_database,
                exc,
            )
            return False
        logger.info("Database connection: SUCCESS")
        return True
