"""Grade repository - handles all grade-related database operations.

Grades live in ``grades``; every mutation can be mirrored into the
append-only ``grade_history`` table. Soft-deleted grades stay in the
table but are hidden from every fetch.
"""
from ...errors import NoRowsError
from ...models import Grade
from .base import AsyncRepository

GRADE_COLUMNS = "id, score, created_at, student_id, teacher_id, event_id, subject_id, is_deleted"


class GradeRepository(AsyncRepository):
    """Repository for grade entity operations.

    Keyed lookups and deletes raise ``NoRowsError`` when nothing matched;
    collection fetches return an empty list instead.

    Examples:
        >>> repo = GradeRepository(db)
        >>> await repo.insert_grade(grade)
        >>> await repo.get_grade_by_id(grade.id)
        >>> await repo.delete_grade(grade.id)
    """

    async def insert_grade(self, grade: Grade) -> None:
        """Insert a new grade."""
        await self._execute(
            f"INSERT INTO grades ({GRADE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            self._to_params(grade)
        )
        await self._commit()

    async def insert_grade_history(self, grade: Grade) -> None:
        """Append a snapshot of ``grade`` to its history."""
        await self._execute(
            """INSERT INTO grade_history
               (grade_id, score, created_at, student_id, teacher_id, event_id, subject_id, is_deleted)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            self._to_params(grade)
        )
        await self._commit()

    async def fetch_grades(self) -> list[Grade]:
        rows = await self._fetchall(
            f"SELECT {GRADE_COLUMNS} FROM grades WHERE is_deleted = 0 ORDER BY id"
        )
        return [self._to_grade(row) for row in rows]

    async def get_grade_by_id(self, grade_id: int) -> Grade:
        """Get grade by ID.

        Raises:
            NoRowsError: no visible grade with this ID
        """
        row = await self._fetchone(
            f"SELECT {GRADE_COLUMNS} FROM grades WHERE id = ? AND is_deleted = 0",
            (grade_id,)
        )
        if row is None:
            raise NoRowsError()
        return self._to_grade(row)

    async def fetch_grades_by_student_id(self, student_id: int) -> list[Grade]:
        rows = await self._fetchall(
            f"""SELECT {GRADE_COLUMNS} FROM grades
                WHERE student_id = ? AND is_deleted = 0
                ORDER BY id""",
            (student_id,)
        )
        return [self._to_grade(row) for row in rows]

    async def fetch_grades_by_subject_id(self, subject_id: int) -> list[Grade]:
        rows = await self._fetchall(
            f"""SELECT {GRADE_COLUMNS} FROM grades
                WHERE subject_id = ? AND is_deleted = 0
                ORDER BY id""",
            (subject_id,)
        )
        return [self._to_grade(row) for row in rows]

    async def fetch_grade_history(self, grade_id: int) -> list[Grade]:
        """Get all history snapshots of a grade, oldest first."""
        rows = await self._fetchall(
            """SELECT grade_id AS id, score, created_at, student_id, teacher_id,
                      event_id, subject_id, is_deleted
               FROM grade_history
               WHERE grade_id = ?
               ORDER BY history_id""",
            (grade_id,)
        )
        return [self._to_grade(row) for row in rows]

    async def delete_grade(self, grade_id: int) -> None:
        """Delete grade permanently.

        Raises:
            NoRowsError: no grade with this ID
        """
        cursor = await self._execute("DELETE FROM grades WHERE id = ?", (grade_id,))
        await self._commit()
        if cursor.rowcount == 0:
            raise NoRowsError()

    async def soft_delete_grade(self, grade_id: int) -> None:
        """Hide grade from fetches without removing the row.

        Raises:
            NoRowsError: no visible grade with this ID
        """
        cursor = await self._execute(
            "UPDATE grades SET is_deleted = 1 WHERE id = ? AND is_deleted = 0",
            (grade_id,)
        )
        await self._commit()
        if cursor.rowcount == 0:
            raise NoRowsError()

    @staticmethod
    def _to_params(grade: Grade) -> tuple:
        return (
            grade.id,
            grade.score,
            grade.created_at,
            grade.student_id,
            grade.teacher_id,
            grade.event_id,
            grade.subject_id,
            grade.is_deleted,
        )

    @staticmethod
    def _to_grade(row: dict) -> Grade:
        return Grade(**{**row, "is_deleted": bool(row["is_deleted"])})
