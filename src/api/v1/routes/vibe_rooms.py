"""Vibe Room API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_vibe_room_service
from api.v1.schemas.common import OkResponse
from api.v1.schemas.vibe_room import JoinVibeRoomRequest, VibeRoomResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.vibe_room_service import VibeRoomService

router = APIRouter(prefix="/vibe-rooms", tags=["vibe-rooms"])


@router.post(
    "/join",
    response_model=VibeRoomResponse | None,
    summary="Join the vibe room for an intent",
    responses={
        200: {"description": "The joined room, or null if the caller has no city/country"},
        409: {"description": "Already in a different room"},
        422: {"description": "Missing or invalid intent"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def join_vibe_room(
    request: Request,
    body: JoinVibeRoomRequest,
    user: CurrentUser,
    service: VibeRoomService = Depends(get_vibe_room_service),
) -> VibeRoomResponse | None:
    """Join (creating if needed) the room for the caller's locality and intent."""
    room = await service.join(user.id, body.intent)
    return VibeRoomResponse.from_entity(room) if room else None


@router.post(
    "/leave",
    response_model=OkResponse,
    summary="Leave my vibe room",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def leave_vibe_room(
    request: Request,
    user: CurrentUser,
    service: VibeRoomService = Depends(get_vibe_room_service),
) -> OkResponse:
    """Leave the caller's current room. Succeeds even if not in one."""
    await service.leave(user.id)
    return OkResponse()


@router.get(
    "/active",
    response_model=VibeRoomResponse | None,
    summary="Get my active vibe room",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_active_vibe_room(
    request: Request,
    user: CurrentUser,
    service: VibeRoomService = Depends(get_vibe_room_service),
) -> VibeRoomResponse | None:
    """Get the room the caller is in, or null."""
    room = await service.get_active_room(user.id)
    return VibeRoomResponse.from_entity(room) if room else None
