"""Vibe room domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.intent import IntentType
from domain.entities.profile import Locality, UserProfile


@dataclass
class VibeRoom:
    """Domain entity for a locality + intent scoped room.

    At most one active room exists per (city, country, intent).
    """

    city: str
    country: str
    intent: IntentType
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def open(cls, locality: Locality, intent: IntentType) -> "VibeRoom":
        """Create a new active room for a locality."""
        if intent is IntentType.NONE:
            raise ValueError("Vibe rooms cannot be opened for intent NONE")
        return cls(city=locality.city, country=locality.country, intent=intent)


@dataclass
class VibeRoomMember:
    """Domain entity for a room membership.

    ``profile`` is None when the member's profile could not be found.
    """

    room_id: UUID
    user_id: UUID
    joined_at: datetime = field(default_factory=datetime.utcnow)
    last_seen_at: datetime = field(default_factory=datetime.utcnow)
    profile: UserProfile | None = None


@dataclass
class VibeRoomWithMembers:
    """A room together with its current members."""

    room: VibeRoom
    members: list[VibeRoomMember] = field(default_factory=list)

    @property
    def id(self) -> UUID:
        return self.room.id
