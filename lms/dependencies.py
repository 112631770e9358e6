"""Shared FastAPI dependencies."""
from typing import AsyncIterator, Optional

from fastapi import Header

from .app_logger import get_logger
from .application.services import RoomService
from .auth import extract_claims
from .errors import InvalidTokenError
from .infrastructure.database import get_async_db, release_async_db
from .infrastructure.repositories import RoomRepository
from .models import Claims

logger = get_logger("auth")


def get_claims(authorization: Optional[str] = Header(None)) -> Claims | None:
    """Decode claims from the Authorization header.

    Returns None for a missing or invalid token; handlers decide when
    to reject the request so the request body is validated first.
    """
    try:
        return extract_claims(authorization)
    except InvalidTokenError as e:
        logger.debug("Rejected token: %s", e)
        return None


async def get_room_service() -> AsyncIterator[RoomService]:
    """Create RoomService on a pooled connection."""
    db = await get_async_db()
    try:
        yield RoomService(room_repository=RoomRepository(db))
    finally:
        await release_async_db(db)
