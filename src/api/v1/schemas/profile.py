"""Pydantic schemas for Profile API."""

from dataclasses import asdict
from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from api.v1.schemas.common import CamelModel
from domain.entities.profile import UserProfile


class ProfileUpsert(CamelModel):
    """Schema for submitting the caller's profile."""

    display_name: str = Field("", max_length=100)
    birthdate: date | None = None
    gender: str = Field("", max_length=50)
    bio: str | None = Field(None, max_length=1000)
    location_lat: float | None = Field(None, ge=-90, le=90)
    location_lng: float | None = Field(None, ge=-180, le=180)
    location_city: str | None = Field(None, max_length=255)
    location_country: str | None = Field(None, max_length=255)


class ProfileResponse(CamelModel):
    """Schema for UserProfile response."""

    id: UUID
    display_name: str
    birthdate: date | None
    gender: str
    bio: str | None
    location_lat: float | None
    location_lng: float | None
    location_city: str | None
    location_country: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(**asdict(profile))
