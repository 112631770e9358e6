"""Async database connection management.

Provides async database connectivity using aiosqlite.
"""
from pathlib import Path
from typing import Optional
import asyncio

import aiosqlite

from ... import config
from ...app_logger import get_logger

logger = get_logger("database")

# Global connection pool reference
_pool: Optional['AsyncConnectionPool'] = None


async def connect(db_path: Path | str) -> aiosqlite.Connection:
    """Open a connection with dict-like rows and foreign keys enforced."""
    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA foreign_keys = ON")
    return conn


class AsyncConnectionPool:
    """Small async connection pool for aiosqlite.

    Connections are reused across requests; at most ``max_connections``
    are handed out at the same time.
    """

    def __init__(self, db_path: Path, max_connections: int = 10):
        self.db_path = db_path
        self.max_connections = max_connections
        self._connections: list[aiosqlite.Connection] = []
        self._semaphore = asyncio.Semaphore(max_connections)
        self._lock = asyncio.Lock()

    async def acquire(self) -> aiosqlite.Connection:
        """Acquire a connection from the pool."""
        await self._semaphore.acquire()
        async with self._lock:
            if self._connections:
                return self._connections.pop()
        try:
            return await connect(self.db_path)
        except Exception:
            self._semaphore.release()
            raise

    async def release(self, conn: aiosqlite.Connection) -> None:
        """Release a connection back to the pool."""
        async with self._lock:
            self._connections.append(conn)
        self._semaphore.release()

    async def close_all(self) -> None:
        """Close all idle connections in the pool."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()


def _get_pool() -> AsyncConnectionPool:
    global _pool
    if _pool is None:
        _pool = AsyncConnectionPool(config.DATABASE_PATH, config.DB_MAX_CONNECTIONS)
    return _pool


async def get_async_db() -> aiosqlite.Connection:
    """Get async database connection from the shared pool."""
    return await _get_pool().acquire()


async def release_async_db(conn: aiosqlite.Connection) -> None:
    """Release async database connection back to pool."""
    if _pool:
        await _pool.release(conn)
    else:
        await conn.close()


async def close_async_db() -> None:
    """Close all async database connections."""
    global _pool
    if _pool:
        await _pool.close_all()
        _pool = None
        logger.info("Database pool closed")
