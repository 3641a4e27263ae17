"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Locality, UserProfile


class IProfileRepository(Protocol):
    """Repository interface for UserProfile entities."""

    async def get(self, user_id: UUID) -> UserProfile | None:
        """Get a profile by user ID."""
        ...

    async def get_many(self, user_ids: list[UUID]) -> list[UserProfile]:
        """Get all profiles whose ID is in the given set (single query)."""
        ...

    async def get_locality(self, user_id: UUID) -> Locality | None:
        """Get a user's locality, or None if the profile or either field is missing."""
        ...

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Create or overwrite a profile keyed by ID."""
        ...
