"""Room service - rooms inventory business logic.

Every mutation is recorded in the room history together with the user
taken from the caller's token claims.
"""
from typing import Protocol

from ...app_logger import get_logger
from ...errors import ConflictError, NoRecordsError
from ...infrastructure.repositories import RoomRepository
from ...models import Claims, Room, parse_id

logger = get_logger("rooms")


class RoomSvc(Protocol):
    """Operations the room HTTP handlers depend on."""

    async def fetch_rooms(self, academic_year_id: str) -> list[Room]: ...
    async def add_rooms(self, claims: Claims, rooms: list[Room]) -> None: ...
    async def update_rooms(self, claims: Claims, rooms: list[Room]) -> None: ...
    async def delete_rooms(self, claims: Claims, room_ids: list[int]) -> None: ...
    async def fetch_room_history(self, room_id: int) -> list[Room]: ...


class RoomService:
    """Service for managing the rooms inventory.

    Responsibilities:
    - Bulk create/update/delete rooms
    - Reject duplicates and unknown rooms
    - Keep room history
    """

    def __init__(self, room_repository: RoomRepository):
        self.room_repo = room_repository

    async def fetch_rooms(self, academic_year_id: str) -> list[Room]:
        """List rooms, optionally scoped to an academic year.

        Args:
            academic_year_id: Raw ID from the request; empty means all rooms

        Raises:
            ConvIDError: ID is not an integer
        """
        if not academic_year_id:
            return await self.room_repo.list_all()

        return await self.room_repo.list_by_academic_year(parse_id(academic_year_id))

    async def add_rooms(self, claims: Claims, rooms: list[Room]) -> None:
        """Create rooms. The whole batch is written or none of it.

        Raises:
            ConflictError: a room ID or building/number pair already exists
                or repeats inside the batch
        """
        seen_ids: set[int] = set()
        seen_numbers: set[tuple[str, str]] = set()
        for room in rooms:
            key = (room.building, room.number)
            if room.id in seen_ids or key in seen_numbers:
                raise ConflictError()
            seen_ids.add(room.id)
            seen_numbers.add(key)
            if await self.room_repo.get_by_id(room.id):
                raise ConflictError()
            if await self.room_repo.get_by_number(room.building, room.number):
                raise ConflictError()

        async with self.room_repo.transaction():
            for room in rooms:
                await self.room_repo.create(room)
                await self.room_repo.add_history(room, action="created", changed_by=claims.user_id)

        logger.info("User %s added %d room(s)", claims.user_id, len(rooms))

    async def update_rooms(self, claims: Claims, rooms: list[Room]) -> None:
        """Update rooms. The whole batch is written or none of it.

        Raises:
            NoRecordsError: one of the rooms does not exist
            ConflictError: new number clashes with another room in the building,
                stored or in the same batch
        """
        seen_numbers: set[tuple[str, str]] = set()
        for room in rooms:
            key = (room.building, room.number)
            if key in seen_numbers:
                raise ConflictError()
            seen_numbers.add(key)
            if not await self.room_repo.get_by_id(room.id):
                raise NoRecordsError()
            existing = await self.room_repo.get_by_number(room.building, room.number)
            if existing and existing.id != room.id:
                raise ConflictError()

        async with self.room_repo.transaction():
            for room in rooms:
                await self.room_repo.update(room)
                await self.room_repo.add_history(room, action="updated", changed_by=claims.user_id)

        logger.info("User %s updated %d room(s)", claims.user_id, len(rooms))

    async def delete_rooms(self, claims: Claims, room_ids: list[int]) -> None:
        """Delete rooms by IDs. Unknown IDs are skipped.

        Raises:
            NoRecordsError: none of the IDs exist
        """
        rooms = []
        for room_id in room_ids:
            room = await self.room_repo.get_by_id(room_id)
            if room:
                rooms.append(room)

        if not rooms:
            raise NoRecordsError()

        async with self.room_repo.transaction():
            for room in rooms:
                await self.room_repo.add_history(room, action="deleted", changed_by=claims.user_id)
            await self.room_repo.delete_many([room.id for room in rooms])

        logger.info("User %s deleted %d room(s)", claims.user_id, len(rooms))

    async def fetch_room_history(self, room_id: int) -> list[Room]:
        return await self.room_repo.list_history(room_id)
