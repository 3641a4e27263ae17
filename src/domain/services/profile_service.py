"""Profile service layer."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import UserProfile
from domain.repositories.unit_of_work import IUnitOfWork

# Fields a user may set on their own profile.
EDITABLE_FIELDS = (
    "display_name",
    "birthdate",
    "gender",
    "bio",
    "location_lat",
    "location_lng",
    "location_city",
    "location_country",
)


class ProfileService:
    """Service layer for reading and submitting user profiles."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_profile(self, user_id: UUID) -> UserProfile:
        """Get the user's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def upsert_profile(self, user_id: UUID, **fields: Any) -> UserProfile:
        """Create the profile on first submission, otherwise overwrite the given fields."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        now = datetime.utcnow()
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            if existing:
                profile = replace(existing, updated_at=now, **fields)
            else:
                profile = UserProfile(id=user_id, created_at=now, updated_at=now, **fields)

            saved = await uow.profiles.upsert(profile)
            await uow.commit()
            return saved
