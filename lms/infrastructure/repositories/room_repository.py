"""Room repository - rooms inventory, academic year assignment and history."""
from ...models import Room
from .base import AsyncRepository

ROOM_COLUMNS = "id, number, type, building, floor, seats, computers"


class RoomRepository(AsyncRepository):
    """Repository for room entity operations.

    Examples:
        >>> repo = RoomRepository(db)
        >>> await repo.create(room)
        >>> await repo.add_history(room, action="created", changed_by=1)
        >>> await repo.list_history(room.id)
    """

    async def get_by_id(self, room_id: int) -> Room | None:
        row = await self._fetchone(
            f"SELECT {ROOM_COLUMNS} FROM rooms WHERE id = ?",
            (room_id,)
        )
        return Room(**row) if row else None

    async def get_by_number(self, building: str, number: str) -> Room | None:
        """Get room by its number within a building."""
        row = await self._fetchone(
            f"SELECT {ROOM_COLUMNS} FROM rooms WHERE building = ? AND number = ?",
            (building, number)
        )
        return Room(**row) if row else None

    async def list_all(self) -> list[Room]:
        rows = await self._fetchall(f"SELECT {ROOM_COLUMNS} FROM rooms ORDER BY id")
        return [Room(**row) for row in rows]

    async def list_by_academic_year(self, academic_year_id: int) -> list[Room]:
        """List rooms assigned to an academic year."""
        rows = await self._fetchall(
            """SELECT r.id, r.number, r.type, r.building, r.floor, r.seats, r.computers
               FROM rooms r
               JOIN academic_year_rooms ay ON ay.room_id = r.id
               WHERE ay.academic_year_id = ?
               ORDER BY r.id""",
            (academic_year_id,)
        )
        return [Room(**row) for row in rows]

    async def assign_to_academic_year(self, academic_year_id: int, room_id: int) -> None:
        await self._execute(
            "INSERT OR IGNORE INTO academic_year_rooms (academic_year_id, room_id) VALUES (?, ?)",
            (academic_year_id, room_id)
        )
        await self._commit()

    async def create(self, room: Room) -> None:
        await self._execute(
            f"INSERT INTO rooms ({ROOM_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            self._to_params(room)
        )
        await self._commit()

    async def update(self, room: Room) -> bool:
        """Update all room fields.

        Returns:
            True if room existed and was updated
        """
        cursor = await self._execute(
            """UPDATE rooms
               SET number = ?, type = ?, building = ?, floor = ?, seats = ?, computers = ?
               WHERE id = ?""",
            (*self._to_params(room)[1:], room.id)
        )
        await self._commit()
        return cursor.rowcount > 0

    async def delete_many(self, room_ids: list[int]) -> int:
        """Delete rooms by IDs.

        Returns:
            Number of rooms deleted
        """
        if not room_ids:
            return 0
        placeholders = ",".join("?" * len(room_ids))
        cursor = await self._execute(
            f"DELETE FROM rooms WHERE id IN ({placeholders})",
            tuple(room_ids)
        )
        await self._commit()
        return cursor.rowcount

    async def add_history(self, room: Room, action: str, changed_by: int) -> None:
        """Append a snapshot of ``room`` to its history.

        Args:
            room: Room state to record
            action: created, updated or deleted
            changed_by: User ID from the caller's token
        """
        await self._execute(
            """INSERT INTO room_history
               (room_id, number, type, building, floor, seats, computers, action, changed_by)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (*self._to_params(room), action, changed_by)
        )
        await self._commit()

    async def list_history(self, room_id: int) -> list[Room]:
        """Get room snapshots, oldest first."""
        rows = await self._fetchall(
            """SELECT room_id AS id, number, type, building, floor, seats, computers
               FROM room_history
               WHERE room_id = ?
               ORDER BY history_id""",
            (room_id,)
        )
        return [Room(**row) for row in rows]

    @staticmethod
    def _to_params(room: Room) -> tuple:
        return (
            room.id,
            room.number,
            room.type.value,
            room.building,
            room.floor,
            room.seats,
            room.computers,
        )
