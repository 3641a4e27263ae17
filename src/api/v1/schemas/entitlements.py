"""Pydantic schemas for Entitlements API."""

from api.v1.schemas.common import CamelModel
from domain.entities.entitlements import SubscriptionTier


class EntitlementsBody(CamelModel):
    """Feature limits for the caller's tier."""

    max_ai_openers_per_day: int
    meet_me_halfway_venues_count: int
    vibe_rooms_join_limit: int
    boosts_per_day: int
    can_create_vibe_room: bool
    can_see_who_liked_me: bool
    can_use_passport: bool
    max_nearby_intents_results: int


class EntitlementsResponse(CamelModel):
    """Schema for the caller's tier and entitlements."""

    tier: SubscriptionTier
    entitlements: EntitlementsBody
