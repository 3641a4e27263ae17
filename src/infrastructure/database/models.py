"""SQLAlchemy ORM models."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

_INTENT_VALUES = "('NONE', 'JUST_CHAT', 'DRINKS', 'DATE', 'SEE_WHERE_IT_GOES')"
_ROOM_INTENT_VALUES = "('JUST_CHAT', 'DRINKS', 'DATE', 'SEE_WHERE_IT_GOES')"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model (id is the Supabase auth user id)."""

    __tablename__ = "user_profiles"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    display_name: Mapped[str | None] = mapped_column(String(100))
    birthdate: Mapped[date | None] = mapped_column(Date)
    gender: Mapped[str | None] = mapped_column(String(50))
    bio: Mapped[str | None] = mapped_column(Text)
    location_lat: Mapped[float | None] = mapped_column(Float)
    location_lng: Mapped[float | None] = mapped_column(Float)
    location_city: Mapped[str | None] = mapped_column(String(255))
    location_country: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    __table_args__ = (
        Index("ix_user_profiles_locality", "location_city", "location_country"),
    )

    # Relationships
    intent: Mapped[Optional["UserIntentModel"]] = relationship(
        "UserIntentModel",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )


class UserIntentModel(Base):
    """Current intent per user (one row per user)."""

    __tablename__ = "user_intents"

    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    intent: Mapped[str] = mapped_column(
        String(32),
        CheckConstraint(f"intent IN {_INTENT_VALUES}", name="ck_user_intents_intent"),
        nullable=False,
        default="NONE",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    __table_args__ = (
        Index("ix_user_intents_intent_updated_at", "intent", "updated_at"),
    )

    # Relationships
    user: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        back_populates="intent",
    )


class VibeRoomModel(Base):
    """Vibe room model (at most one active row per city/country/intent)."""

    __tablename__ = "vibe_rooms"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    intent: Mapped[str] = mapped_column(
        String(32),
        CheckConstraint(f"intent IN {_ROOM_INTENT_VALUES}", name="ck_vibe_rooms_intent"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index(
            "uq_vibe_rooms_active_locality_intent",
            "city",
            "country",
            "intent",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    # Relationships
    members: Mapped[list["VibeRoomMemberModel"]] = relationship(
        "VibeRoomMemberModel",
        back_populates="room",
        cascade="all, delete-orphan",
    )


class VibeRoomMemberModel(Base):
    """Vibe room membership (composite PK, user_id unique system-wide)."""

    __tablename__ = "vibe_room_members"

    room_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("vibe_rooms.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    last_seen_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_vibe_room_members_user_id"),
    )

    # Relationships
    room: Mapped["VibeRoomModel"] = relationship(
        "VibeRoomModel",
        back_populates="members",
    )


class SubscriptionPlanModel(Base):
    """Subscription plan catalogue (slug is the tier name)."""

    __tablename__ = "subscription_plans"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100))


class UserSubscriptionModel(Base):
    """A user's subscription to a plan."""

    __tablename__ = "user_subscriptions"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("subscription_plans.id"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    current_period_end: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    plan: Mapped["SubscriptionPlanModel"] = relationship("SubscriptionPlanModel")
