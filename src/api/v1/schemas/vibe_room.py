"""Pydantic schemas for Vibe Room API."""

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from api.v1.schemas.common import CamelModel
from api.v1.schemas.profile import ProfileResponse
from domain.entities.intent import IntentType
from domain.entities.vibe_room import VibeRoomMember, VibeRoomWithMembers


class JoinVibeRoomRequest(CamelModel):
    """Schema for joining a vibe room."""

    intent: IntentType

    @field_validator("intent")
    @classmethod
    def _intent_not_none(cls, value: IntentType) -> IntentType:
        if value is IntentType.NONE:
            raise ValueError("intent is required")
        return value


class VibeRoomMemberResponse(CamelModel):
    """Schema for a room member."""

    room_id: UUID
    user_id: UUID
    joined_at: datetime
    last_seen_at: datetime
    profile: ProfileResponse | None = None

    @classmethod
    def from_entity(cls, member: VibeRoomMember) -> "VibeRoomMemberResponse":
        return cls(
            room_id=member.room_id,
            user_id=member.user_id,
            joined_at=member.joined_at,
            last_seen_at=member.last_seen_at,
            profile=ProfileResponse.from_entity(member.profile) if member.profile else None,
        )


class VibeRoomResponse(CamelModel):
    """Schema for a room with its members."""

    id: UUID
    city: str
    country: str
    intent: IntentType
    created_at: datetime
    is_active: bool
    members: list[VibeRoomMemberResponse]

    @classmethod
    def from_entity(cls, view: VibeRoomWithMembers) -> "VibeRoomResponse":
        room = view.room
        return cls(
            id=room.id,
            city=room.city,
            country=room.country,
            intent=room.intent,
            created_at=room.created_at,
            is_active=room.is_active,
            members=[VibeRoomMemberResponse.from_entity(m) for m in view.members],
        )
