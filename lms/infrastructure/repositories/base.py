"""Base repository protocol and utilities.

This module defines the interface that all repositories build on.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol

import aiosqlite


class AsyncConnectionProtocol(Protocol):
    """Protocol for async database connection."""

    async def execute(self, sql: str, parameters: tuple = ...) -> aiosqlite.Cursor: ...
    async def executemany(self, sql: str, parameters: list[tuple]) -> aiosqlite.Cursor: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class AsyncRepository:
    """Async base repository class.

    Provides async database operations using aiosqlite.

    Example:
        class GradeRepository(AsyncRepository):
            async def get_grade_by_id(self, grade_id: int) -> Grade:
                row = await self._fetchone("SELECT * FROM grades WHERE id = ?", (grade_id,))
                ...
    """

    def __init__(self, connection: AsyncConnectionProtocol):
        """Initialize repository with async database connection.

        Args:
            connection: Async database connection (aiosqlite.Connection)
        """
        self._conn = connection
        self._in_transaction = False

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run several writes as one unit.

        Writes inside the block skip their own commit. The block commits
        once on success and rolls everything back if it raises.

        Example:
            async with repo.transaction():
                await repo.create(room)
                await repo.add_history(room, action="created", changed_by=1)
        """
        self._in_transaction = True
        try:
            yield
        except Exception:
            await self._conn.rollback()
            raise
        else:
            await self._conn.commit()
        finally:
            self._in_transaction = False

    async def _execute(self, sql: str, parameters: tuple = ()) -> aiosqlite.Cursor:
        """Execute SQL query with parameters asynchronously.

        Args:
            sql: SQL query string
            parameters: Query parameters (prevents SQL injection)

        Returns:
            aiosqlite.Cursor with results
        """
        return await self._conn.execute(sql, parameters)

    async def _execute_many(self, sql: str, parameters_list: list[tuple]) -> aiosqlite.Cursor:
        """Execute SQL query multiple times asynchronously.

        Args:
            sql: SQL query string
            parameters_list: List of parameter tuples

        Returns:
            aiosqlite.Cursor
        """
        return await self._conn.executemany(sql, parameters_list)

    async def _commit(self) -> None:
        """Commit current transaction asynchronously.

        No-op inside ``transaction()``; the block commits at its end.
        """
        if not self._in_transaction:
            await self._conn.commit()

    def _row_to_dict(self, row: aiosqlite.Row | None) -> dict | None:
        """Convert aiosqlite.Row to dictionary.

        Args:
            row: Database row or None

        Returns:
            Dictionary representation or None
        """
        return dict(row) if row else None

    async def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        """Fetch single row and return as dict.

        Args:
            sql: SQL query
            parameters: Query parameters

        Returns:
            Dictionary or None
        """
        cursor = await self._execute(sql, parameters)
        row = await cursor.fetchone()
        return self._row_to_dict(row)

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """Fetch all rows and return as list of dicts.

        Args:
            sql: SQL query
            parameters: Query parameters

        Returns:
            List of dictionaries (empty list when nothing matched)
        """
        cursor = await self._execute(sql, parameters)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]
