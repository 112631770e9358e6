"""Room repository integration tests."""
import sqlite3

import pytest

from lms.models import Room, RoomType


@pytest.fixture
def room() -> Room:
    return Room(
        id=1,
        number="10-Test-A",
        type=RoomType.CLASSROOM,
        building="Building 123",
        floor=0,
        seats=30,
        computers=15,
    )


@pytest.mark.asyncio
async def test_create_and_get_by_id(room_repo, room):
    await room_repo.create(room)

    assert await room_repo.get_by_id(room.id) == room
    assert await room_repo.get_by_id(99) is None


@pytest.mark.asyncio
async def test_get_by_number(room_repo, room):
    await room_repo.create(room)

    assert await room_repo.get_by_number("Building 123", "10-Test-A") == room
    assert await room_repo.get_by_number("Building 9", "10-Test-A") is None


@pytest.mark.asyncio
async def test_same_number_in_building_rejected(room_repo, room):
    await room_repo.create(room)

    with pytest.raises(sqlite3.IntegrityError):
        await room_repo.create(room.model_copy(update={"id": 2}))


@pytest.mark.asyncio
async def test_list_all_empty(room_repo):
    assert await room_repo.list_all() == []


@pytest.mark.asyncio
async def test_list_by_academic_year(room_repo, room):
    other = room.model_copy(update={"id": 2, "number": "11-Test-B"})
    await room_repo.create(room)
    await room_repo.create(other)
    await room_repo.assign_to_academic_year(2024, other.id)
    await room_repo.assign_to_academic_year(2024, other.id)

    assert await room_repo.list_by_academic_year(2024) == [other]
    assert await room_repo.list_by_academic_year(2025) == []


@pytest.mark.asyncio
async def test_update(room_repo, room):
    await room_repo.create(room)
    changed = room.model_copy(update={"seats": 40, "type": RoomType.COMPUTER_LAB})

    assert await room_repo.update(changed) is True
    assert await room_repo.get_by_id(room.id) == changed
    assert await room_repo.update(room.model_copy(update={"id": 99})) is False


@pytest.mark.asyncio
async def test_delete_many(room_repo, room):
    await room_repo.create(room)

    assert await room_repo.delete_many([room.id, 99]) == 1
    assert await room_repo.delete_many([]) == 0
    assert await room_repo.list_all() == []


@pytest.mark.asyncio
async def test_delete_cascades_academic_year_assignment(room_repo, room):
    await room_repo.create(room)
    await room_repo.assign_to_academic_year(2024, room.id)

    await room_repo.delete_many([room.id])

    assert await room_repo.list_by_academic_year(2024) == []


@pytest.mark.asyncio
async def test_history_ordered_oldest_first(room_repo, room):
    changed = room.model_copy(update={"seats": 40})
    await room_repo.add_history(room, action="created", changed_by=1)
    await room_repo.add_history(changed, action="updated", changed_by=2)

    assert await room_repo.list_history(room.id) == [room, changed]
    assert await room_repo.list_history(99) == []


@pytest.mark.asyncio
async def test_history_rejects_unknown_action(room_repo, room):
    with pytest.raises(sqlite3.IntegrityError):
        await room_repo.add_history(room, action="renamed", changed_by=1)


@pytest.mark.asyncio
async def test_transaction_commits_all_writes(room_repo, room):
    async with room_repo.transaction():
        await room_repo.create(room)
        await room_repo.add_history(room, action="created", changed_by=1)

    assert await room_repo.get_by_id(room.id) == room
    assert await room_repo.list_history(room.id) == [room]


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(room_repo, room):
    with pytest.raises(sqlite3.IntegrityError):
        async with room_repo.transaction():
            await room_repo.create(room)
            await room_repo.add_history(room, action="created", changed_by=1)
            await room_repo.create(room.model_copy(update={"number": "10-Test-B"}))

    assert await room_repo.list_all() == []
    assert await room_repo.list_history(room.id) == []


@pytest.mark.asyncio
async def test_writes_commit_again_after_transaction(room_repo, room):
    with pytest.raises(RuntimeError):
        async with room_repo.transaction():
            raise RuntimeError("abort")

    await room_repo.create(room)

    assert room_repo._in_transaction is False
    assert await room_repo.get_by_id(room.id) == room
