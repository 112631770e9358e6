# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository.

Usage:
    repo = GradeRepository(db)
    grade = await repo.get_grade_by_id(grade_id)
"""
from .base import AsyncRepository, AsyncConnectionProtocol
from .grade_repository import GradeRepository
from .room_repository import RoomRepository

__all__ = [
    "AsyncRepository",
    "AsyncConnectionProtocol",
    "GradeRepository",
    "RoomRepository",
]
