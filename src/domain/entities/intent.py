"""Intent domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from domain.entities.profile import UserProfile


class IntentType(str, Enum):
    """What a user currently wants to do.

    NONE keeps the row but turns the user invisible to matching.
    """

    NONE = "NONE"
    JUST_CHAT = "JUST_CHAT"
    DRINKS = "DRINKS"
    DATE = "DATE"
    SEE_WHERE_IT_GOES = "SEE_WHERE_IT_GOES"

    @property
    def is_active(self) -> bool:
        return self is not IntentType.NONE


@dataclass
class UserIntent:
    """Domain entity for a user's current intent (one row per user)."""

    user_id: UUID
    intent: IntentType = IntentType.NONE
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class NearbyMatch:
    """A nearby user sharing the requester's intent."""

    profile: UserProfile
    intent: UserIntent


def latest_per_user(matches: list[NearbyMatch]) -> list[NearbyMatch]:
    """Collapse matches to one per user, keeping the most recently updated intent.

    First-seen order is preserved.
    """
    best: dict[UUID, NearbyMatch] = {}
    for match in matches:
        current = best.get(match.intent.user_id)
        if current is None or match.intent.updated_at > current.intent.updated_at:
            best[match.intent.user_id] = match
    return list(best.values())
