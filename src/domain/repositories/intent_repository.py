"""Intent repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.intent import IntentType, NearbyMatch, UserIntent
from domain.entities.profile import Locality


class IIntentRepository(Protocol):
    """Repository interface for UserIntent entities."""

    async def get(self, user_id: UUID) -> UserIntent | None:
        """Get a user's current intent."""
        ...

    async def upsert(
        self, user_id: UUID, intent: IntentType, updated_at: datetime
    ) -> UserIntent:
        """Create or overwrite the intent row for a user."""
        ...

    async def find_matching(
        self,
        intent: IntentType,
        locality: Locality,
        since: datetime,
        exclude_user_id: UUID,
        limit: int,
    ) -> list[NearbyMatch]:
        """Find other users with the intent in the locality, updated at or after ``since``."""
        ...
