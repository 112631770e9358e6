"""Async database infrastructure.

This module provides async database connectivity using aiosqlite
and the SQL migration runner.
"""
from .connection import (
    AsyncConnectionPool,
    connect,
    get_async_db,
    release_async_db,
    close_async_db,
)
from .migrations import Migration, apply_migrations, discover_migrations

__all__ = [
    'AsyncConnectionPool',
    'connect',
    'get_async_db',
    'release_async_db',
    'close_async_db',
    'Migration',
    'apply_migrations',
    'discover_migrations',
]
