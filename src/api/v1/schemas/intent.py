"""Pydantic schemas for Intent API."""

from dataclasses import asdict
from datetime import datetime
from uuid import UUID

from api.v1.schemas.common import CamelModel
from api.v1.schemas.profile import ProfileResponse
from domain.entities.intent import IntentType, NearbyMatch, UserIntent


class IntentUpdate(CamelModel):
    """Schema for declaring the caller's intent."""

    intent: IntentType


class IntentResponse(CamelModel):
    """Schema for UserIntent response."""

    user_id: UUID
    intent: IntentType
    updated_at: datetime

    @classmethod
    def from_entity(cls, intent: UserIntent) -> "IntentResponse":
        return cls(**asdict(intent))


class NearbyMatchResponse(CamelModel):
    """A nearby user and their current intent."""

    profile: ProfileResponse
    intent: IntentResponse

    @classmethod
    def from_entity(cls, match: NearbyMatch) -> "NearbyMatchResponse":
        return cls(
            profile=ProfileResponse.from_entity(match.profile),
            intent=IntentResponse.from_entity(match.intent),
        )
