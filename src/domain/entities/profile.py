"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Locality:
    """City/country pair used as the only geographic matching key.

    Comparison is exact, case-sensitive string equality.
    """

    city: str
    country: str


@dataclass
class UserProfile:
    """Domain entity for a user profile (keyed by the auth user id)."""

    id: UUID
    display_name: str = ""
    birthdate: date | None = None
    gender: str = ""
    bio: str | None = None
    location_lat: float | None = None
    location_lng: float | None = None
    location_city: str | None = None
    location_country: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def locality(self) -> Locality | None:
        """The profile's locality, or None unless both city and country are set."""
        return locality_of(self.location_city, self.location_country)


def locality_of(city: str | None, country: str | None) -> Locality | None:
    """Build a Locality from raw columns; empty strings count as unset."""
    if not city or not country:
        return None
    return Locality(city=city, country=country)
