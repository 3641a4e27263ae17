"""create_matching_tables

Revision ID: 4c1d2e7a9b30
Revises:
Create Date: 2026-10-19 10:12:03.418220

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d2e7a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

INTENTS = "('NONE', 'JUST_CHAT', 'DRINKS', 'DATE', 'SEE_WHERE_IT_GOES')"
ROOM_INTENTS = "('JUST_CHAT', 'DRINKS', 'DATE', 'SEE_WHERE_IT_GOES')"


def upgrade() -> None:
    """Create profile, intent, vibe room and subscription tables."""
    op.create_table('user_profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('birthdate', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=50), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location_lat', sa.Float(), nullable=True),
        sa.Column('location_lng', sa.Float(), nullable=True),
        sa.Column('location_city', sa.String(length=255), nullable=True),
        sa.Column('location_country', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_user_profiles_locality', 'user_profiles',
        ['location_city', 'location_country'], unique=False,
    )

    op.create_table('user_intents',
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('intent', sa.String(length=32), nullable=False, server_default='NONE'),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint(f"intent IN {INTENTS}", name='ck_user_intents_intent'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id'),
    )
    op.create_index(
        'ix_user_intents_intent_updated_at', 'user_intents',
        ['intent', 'updated_at'], unique=False,
    )

    op.create_table('vibe_rooms',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('city', sa.String(length=255), nullable=False),
        sa.Column('country', sa.String(length=255), nullable=False),
        sa.Column('intent', sa.String(length=32), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint(f"intent IN {ROOM_INTENTS}", name='ck_vibe_rooms_intent'),
        sa.PrimaryKeyConstraint('id'),
    )
    # Concurrent first joins race on this index; the loser re-fetches.
    op.create_index(
        'uq_vibe_rooms_active_locality_intent', 'vibe_rooms',
        ['city', 'country', 'intent'], unique=True,
        postgresql_where=sa.text('is_active'),
    )

    op.create_table('vibe_room_members',
        sa.Column('room_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('last_seen_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['room_id'], ['vibe_rooms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('room_id', 'user_id'),
        sa.UniqueConstraint('user_id', name='uq_vibe_room_members_user_id'),
    )

    op.create_table('subscription_plans',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('slug', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table('user_subscriptions',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('plan_id', sa.UUID(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('current_period_end', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['plan_id'], ['subscription_plans.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_user_subscriptions_user_id', 'user_subscriptions', ['user_id'], unique=False,
    )

    op.execute(
        "INSERT INTO subscription_plans (slug, name) VALUES "
        "('FREE', 'Free'), ('PLUS', 'Plus'), ('ELITE', 'Elite');"
    )

    # The API connects with the service role; clients get no direct table access.
    for table in (
        'user_profiles', 'user_intents', 'vibe_rooms',
        'vibe_room_members', 'subscription_plans', 'user_subscriptions',
    ):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")


def downgrade() -> None:
    """Drop matching tables."""
    op.drop_index('ix_user_subscriptions_user_id', table_name='user_subscriptions')
    op.drop_table('user_subscriptions')
    op.drop_table('subscription_plans')
    op.drop_table('vibe_room_members')
    op.drop_index('uq_vibe_rooms_active_locality_intent', table_name='vibe_rooms')
    op.drop_table('vibe_rooms')
    op.drop_index('ix_user_intents_intent_updated_at', table_name='user_intents')
    op.drop_table('user_intents')
    op.drop_index('ix_user_profiles_locality', table_name='user_profiles')
    op.drop_table('user_profiles')
