"""Subscription tier and entitlement value objects.

Entitlements are derived per request from a fetched subscription snapshot and
never cached as process-wide state.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class SubscriptionTier(str, Enum):
    """Paid tier a user is on."""

    FREE = "FREE"
    PLUS = "PLUS"
    ELITE = "ELITE"


@dataclass(frozen=True)
class SubscriptionSnapshot:
    """The user's latest active subscription as read from storage."""

    user_id: UUID
    status: str
    plan_slug: str | None
    current_period_end: datetime | None = None


@dataclass(frozen=True)
class FeatureEntitlements:
    """Feature limits unlocked by a tier."""

    max_ai_openers_per_day: int
    meet_me_halfway_venues_count: int
    vibe_rooms_join_limit: int
    boosts_per_day: int
    can_create_vibe_room: bool
    can_see_who_liked_me: bool
    can_use_passport: bool
    max_nearby_intents_results: int


FREE_ENTITLEMENTS = FeatureEntitlements(
    max_ai_openers_per_day=3,
    meet_me_halfway_venues_count=3,
    vibe_rooms_join_limit=2,
    boosts_per_day=0,
    can_create_vibe_room=False,
    can_see_who_liked_me=False,
    can_use_passport=False,
    max_nearby_intents_results=10,
)

PLUS_ENTITLEMENTS = FeatureEntitlements(
    max_ai_openers_per_day=10,
    meet_me_halfway_venues_count=5,
    vibe_rooms_join_limit=5,
    boosts_per_day=1,
    can_create_vibe_room=True,
    can_see_who_liked_me=False,
    can_use_passport=False,
    max_nearby_intents_results=25,
)

ELITE_ENTITLEMENTS = FeatureEntitlements(
    max_ai_openers_per_day=50,
    meet_me_halfway_venues_count=10,
    vibe_rooms_join_limit=10,
    boosts_per_day=3,
    can_create_vibe_room=True,
    can_see_who_liked_me=True,
    can_use_passport=True,
    max_nearby_intents_results=50,
)

_ENTITLEMENTS_BY_TIER = {
    SubscriptionTier.FREE: FREE_ENTITLEMENTS,
    SubscriptionTier.PLUS: PLUS_ENTITLEMENTS,
    SubscriptionTier.ELITE: ELITE_ENTITLEMENTS,
}


def resolve_tier(snapshot: SubscriptionSnapshot | None) -> SubscriptionTier:
    """Map a subscription snapshot to a tier. Unknown plans fall back to FREE."""
    if snapshot is None or not snapshot.plan_slug:
        return SubscriptionTier.FREE
    try:
        return SubscriptionTier(snapshot.plan_slug)
    except ValueError:
        return SubscriptionTier.FREE


def get_entitlements_for_tier(tier: SubscriptionTier) -> FeatureEntitlements:
    """Get the entitlements granted by a tier."""
    return _ENTITLEMENTS_BY_TIER.get(tier, FREE_ENTITLEMENTS)
