"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Locality, UserProfile, locality_of
from infrastructure.database.models import ProfileModel
from infrastructure.database.upsert import upsert_row


def profile_to_entity(model: ProfileModel) -> UserProfile:
    """Convert ORM model to domain entity.

    Shared by every repository that joins against profiles.
    """
    return UserProfile(
        id=model.id,
        display_name=model.display_name or "",
        birthdate=model.birthdate,
        gender=model.gender or "",
        bio=model.bio,
        location_lat=model.location_lat,
        location_lng=model.location_lng,
        location_city=model.location_city,
        location_country=model.location_country,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UUID) -> UserProfile | None:
        """Get a profile by user ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return profile_to_entity(model) if model else None

    async def get_many(self, user_ids: list[UUID]) -> list[UserProfile]:
        """Get all profiles whose ID is in the given set."""
        if not user_ids:
            return []
        stmt = select(ProfileModel).where(ProfileModel.id.in_(user_ids))
        result = await self._session.execute(stmt)
        return [profile_to_entity(model) for model in result.scalars()]

    async def get_locality(self, user_id: UUID) -> Locality | None:
        """Get a user's city/country without loading the whole profile."""
        stmt = select(ProfileModel.location_city, ProfileModel.location_country).where(
            ProfileModel.id == user_id
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return locality_of(row.location_city, row.location_country)

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Create or overwrite a profile keyed by ID. created_at is kept on overwrite."""
        editable = {
            "display_name": profile.display_name,
            "birthdate": profile.birthdate,
            "gender": profile.gender,
            "bio": profile.bio,
            "location_lat": profile.location_lat,
            "location_lng": profile.location_lng,
            "location_city": profile.location_city,
            "location_country": profile.location_country,
            "updated_at": profile.updated_at,
        }
        model = await upsert_row(
            self._session,
            ProfileModel,
            values={"id": profile.id, "created_at": profile.created_at, **editable},
            conflict_keys=["id"],
            update_keys=list(editable),
        )
        return profile_to_entity(model)
