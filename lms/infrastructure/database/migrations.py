"""Versioned SQL migrations.

Migration files live in one directory and are named
``NNNN_description.up.sql``. They are applied in version order and each
applied version is recorded in ``schema_migrations`` so running the
migrator twice is a no-op.

Usage:
    conn = await connect(DATABASE_PATH)
    applied = await apply_migrations(conn, MIGRATIONS_DIR)
"""
import re
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from ...app_logger import get_logger
from ...errors import MigrationError

logger = get_logger("migrations")

MIGRATION_PATTERN = re.compile(r"^(\d+)_([\w-]+)\.up\.sql$")


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    path: Path


def discover_migrations(directory: Path) -> list[Migration]:
    """List migration files in ``directory`` sorted by version.

    Raises:
        MigrationError: directory missing or two files share a version
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise MigrationError(f"Could not open migration sources: {directory}")

    migrations: dict[int, Migration] = {}
    for path in directory.iterdir():
        match = MIGRATION_PATTERN.match(path.name)
        if not match:
            continue
        version = int(match.group(1))
        if version in migrations:
            raise MigrationError(
                f"Duplicate migration version {version}: "
                f"{migrations[version].path.name}, {path.name}"
            )
        migrations[version] = Migration(version, match.group(2), path)

    return [migrations[v] for v in sorted(migrations)]


async def applied_versions(conn: aiosqlite.Connection) -> set[int]:
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    await conn.commit()
    cursor = await conn.execute("SELECT version FROM schema_migrations")
    rows = await cursor.fetchall()
    return {row[0] for row in rows}


async def apply_migrations(conn: aiosqlite.Connection, directory: Path) -> list[int]:
    """Apply every pending migration in ``directory``.

    Returns:
        Versions applied by this call, in order

    Raises:
        MigrationError: a migration file failed; earlier ones stay applied
    """
    done = await applied_versions(conn)
    applied = []

    for migration in discover_migrations(directory):
        if migration.version in done:
            continue

        try:
            script = migration.path.read_text(encoding="utf-8")
            await conn.executescript(script)
            await conn.execute(
                "INSERT INTO schema_migrations (version, name) VALUES (?, ?)",
                (migration.version, migration.name)
            )
            await conn.commit()
        except (OSError, aiosqlite.Error) as e:
            await conn.rollback()
            raise MigrationError(
                f"Could not apply migrations: {migration.path.name}, err: {e}"
            ) from e

        logger.info("Applied migration %04d_%s", migration.version, migration.name)
        applied.append(migration.version)

    return applied
