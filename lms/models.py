"""Domain records passed between repositories, services and routes."""
import re
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field

from .errors import ConvIDError

ID_PATTERN = re.compile(r"[+-]?[0-9]+")
ID_MIN, ID_MAX = -(2**63), 2**63 - 1


def parse_id(raw: str) -> int:
    """Parse a decimal ID taken from a URL.

    Only ASCII digits with an optional sign are accepted, and the value
    must fit a signed 64-bit column.

    Raises:
        ConvIDError: not a decimal integer or out of range
    """
    if not ID_PATTERN.fullmatch(raw):
        raise ConvIDError(f"not an integer: {raw!r}")
    value = int(raw)
    if not ID_MIN <= value <= ID_MAX:
        raise ConvIDError(f"out of range: {raw}")
    return value


class Grade(BaseModel):
    id: int
    score: int
    created_at: str  # RFC3339
    student_id: int
    teacher_id: int
    event_id: int
    subject_id: int
    is_deleted: bool = False


class RoomType(str, Enum):
    CLASSROOM = "classroom"
    LECTURE_HALL = "lecture_hall"
    LABORATORY = "laboratory"
    COMPUTER_LAB = "computer_lab"
    GYM = "gym"
    OFFICE = "office"


class Room(BaseModel):
    id: int
    number: str
    type: RoomType
    building: str
    floor: int
    seats: int
    computers: int


class Claims(BaseModel):
    """Identity decoded from a bearer token.

    The auth service signs ``UserID``/``FullUserName``/``ExpiresAt``;
    snake_case names and the registered ``exp`` claim are read as well.
    """
    user_id: int = Field(validation_alias=AliasChoices("user_id", "UserID"))
    full_user_name: str = Field(
        default="", validation_alias=AliasChoices("full_user_name", "FullUserName")
    )
    expires_at: int | None = Field(
        default=None, validation_alias=AliasChoices("expires_at", "exp", "ExpiresAt")
    )
