"""Test configuration and fixtures for the LMS backend.

This module provides isolated test environments:
- Temporary SQLite database migrated with the real migration files
- Signed bearer tokens
- Room service mocks injected into the FastAPI app
"""
import os
import sys
import time
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock

import jwt
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Ensure lms is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment BEFORE importing lms modules
os.environ["LMS_BASE_URL"] = ""
os.environ["LMS_JWT_SECRET"] = "test-secret-for-hs256-signing-0123456789"
os.environ["LMS_JWT_ALGORITHM"] = "HS256"

MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"


def make_token(
    user_id: int = 1000000,
    full_user_name: str = "Admin Admin",
    expires_in: int = 3600,
    secret: str | None = None,
) -> str:
    """Sign a token the way the auth service does."""
    from lms import config

    payload = {
        "user_id": user_id,
        "full_user_name": full_user_name,
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, secret or config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


@pytest.fixture
def token_factory():
    """Sign tokens with custom claims: token_factory(expires_in=-60)."""
    return make_token


@pytest.fixture
def test_token() -> str:
    return make_token()


@pytest.fixture
def test_claims(test_token: str):
    from lms.auth import extract_claims

    return extract_claims(test_token)


# ============================================================================
# Database
# ============================================================================

@pytest_asyncio.fixture
async def migrated_db(tmp_path: Path):
    """Fresh database file with every migration applied.

    Each test gets its own database, so tests never see each other's rows.
    """
    from lms.infrastructure.database import apply_migrations, connect

    conn = await connect(tmp_path / "test.db")
    await apply_migrations(conn, MIGRATIONS_DIR)

    yield conn

    await conn.close()


@pytest_asyncio.fixture
async def grade_repo(migrated_db):
    from lms.infrastructure.repositories import GradeRepository

    return GradeRepository(migrated_db)


@pytest_asyncio.fixture
async def room_repo(migrated_db):
    from lms.infrastructure.repositories import RoomRepository

    return RoomRepository(migrated_db)


# ============================================================================
# HTTP
# ============================================================================

@pytest.fixture
def room_service() -> AsyncMock:
    """Mock RoomService; every method is awaitable."""
    from lms.application.services import RoomService

    return AsyncMock(spec=RoomService)


@pytest.fixture
def client(room_service: AsyncMock) -> Generator[TestClient, None, None]:
    """Client whose routes talk to ``room_service`` instead of the database.

    Not entered as a context manager, so the lifespan (migrations) does not run.

    Usage:
        def test_something(client, room_service):
            room_service.fetch_rooms.return_value = []
            response = client.get("/rooms")
    """
    from lms.dependencies import get_room_service
    from lms.main import app

    app.dependency_overrides[get_room_service] = lambda: room_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def live_client(tmp_path: Path, monkeypatch) -> Generator[TestClient, None, None]:
    """Client backed by a real, freshly migrated database file."""
    from lms import config
    from lms.main import app

    monkeypatch.setattr(config, "DATABASE_PATH", tmp_path / "live.db")
    monkeypatch.setattr(config, "MIGRATIONS_DIR", MIGRATIONS_DIR)

    with TestClient(app) as test_client:
        yield test_client
