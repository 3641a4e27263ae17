"""Subscription repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.entitlements import SubscriptionSnapshot


class ISubscriptionRepository(Protocol):
    """Read-only access to subscription state."""

    async def get_active(self, user_id: UUID) -> SubscriptionSnapshot | None:
        """Get the user's ACTIVE subscription with the latest period end."""
        ...
