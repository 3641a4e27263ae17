"""Vibe room repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.intent import IntentType
from domain.entities.profile import Locality
from domain.entities.vibe_room import VibeRoom, VibeRoomMember


class IVibeRoomRepository(Protocol):
    """Repository interface for VibeRoom and VibeRoomMember entities."""

    async def get(self, room_id: UUID) -> VibeRoom | None:
        """Get a room by ID."""
        ...

    async def get_active(
        self, locality: Locality, intent: IntentType
    ) -> VibeRoom | None:
        """Get the active room for a locality and intent."""
        ...

    async def create(self, room: VibeRoom) -> VibeRoom:
        """Create a room.

        Raises:
            VibeRoomConflictError: If an active room already exists for the tuple.
        """
        ...

    async def get_membership(self, user_id: UUID) -> VibeRoomMember | None:
        """Get the user's membership row, whichever room it is in."""
        ...

    async def get_members(self, room_id: UUID) -> list[VibeRoomMember]:
        """Get all memberships of a room in join order."""
        ...

    async def upsert_member(
        self, room_id: UUID, user_id: UUID, seen_at: datetime
    ) -> VibeRoomMember:
        """Insert a membership or refresh last_seen_at on an existing one."""
        ...

    async def remove_member(self, user_id: UUID) -> bool:
        """Delete the user's membership. Returns False if there was none."""
        ...
