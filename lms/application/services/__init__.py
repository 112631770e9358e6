"""Application services - business logic layer."""

from .room_service import RoomService, RoomSvc

__all__ = [
    "RoomService",
    "RoomSvc",
]
