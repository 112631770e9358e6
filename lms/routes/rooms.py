"""Rooms inventory routes.

Write endpoints take a bearer token in the Authorization header. Errors
are returned as ``{"code": ..., "message": ...}`` with the same mapping
on every endpoint.
"""
from fastapi import APIRouter, Depends, Request, Response
from pydantic import TypeAdapter, ValidationError

from ..application.services import RoomSvc
from ..dependencies import get_claims, get_room_service
from ..errors import BadRequestError, ServiceError
from ..models import Claims, Room, parse_id
from .responses import error_response

router = APIRouter(prefix="/rooms", tags=["rooms"])

rooms_adapter = TypeAdapter(list[Room])
ids_adapter = TypeAdapter(list[int])


async def decode_body(request: Request, adapter: TypeAdapter):
    body = await request.body()
    try:
        return adapter.validate_json(body)
    except ValidationError as e:
        raise ServiceError(f"decoding request body: {e}") from e


def require_claims(claims: Claims | None) -> Claims:
    if claims is None:
        raise BadRequestError()
    return claims


@router.get("", response_model=list[Room])
async def fetch_rooms(
    academic_year_id: str = "",
    service: RoomSvc = Depends(get_room_service),
):
    """List rooms, optionally for one academic year."""
    try:
        return await service.fetch_rooms(academic_year_id)
    except Exception as e:
        return error_response(e)


@router.post("", response_model=list[Room])
async def add_rooms(
    request: Request,
    claims: Claims | None = Depends(get_claims),
    service: RoomSvc = Depends(get_room_service),
):
    """Create rooms from a JSON array and echo them back."""
    try:
        rooms = await decode_body(request, rooms_adapter)
        await service.add_rooms(require_claims(claims), rooms)
        return rooms
    except Exception as e:
        return error_response(e)


@router.put("", response_model=list[Room])
async def update_rooms(
    request: Request,
    claims: Claims | None = Depends(get_claims),
    service: RoomSvc = Depends(get_room_service),
):
    """Update rooms from a JSON array and echo them back."""
    try:
        rooms = await decode_body(request, rooms_adapter)
        await service.update_rooms(require_claims(claims), rooms)
        return rooms
    except Exception as e:
        return error_response(e)


@router.delete("")
async def delete_rooms(
    request: Request,
    claims: Claims | None = Depends(get_claims),
    service: RoomSvc = Depends(get_room_service),
):
    """Delete rooms by a JSON array of IDs. Empty body on success."""
    try:
        room_ids = await decode_body(request, ids_adapter)
        await service.delete_rooms(require_claims(claims), room_ids)
        return Response(status_code=200)
    except Exception as e:
        return error_response(e)


@router.get("/{room_id}/history", response_model=list[Room])
async def fetch_room_history(
    room_id: str,
    service: RoomSvc = Depends(get_room_service),
):
    """Get all recorded states of a room, oldest first."""
    try:
        return await service.fetch_room_history(parse_id(room_id))
    except Exception as e:
        return error_response(e)
