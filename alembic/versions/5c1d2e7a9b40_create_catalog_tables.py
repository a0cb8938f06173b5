"""Create catalog tables

Revision ID: 5c1d2e7a9b40
Revises:
Create Date: 2026-10-19 10:12:04.318270

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1d2e7a9b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_ROWS = sa.text("deleted_at IS NULL")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        'properties',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(64), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('property_ids', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'tracking_plans',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('event_ids', sa.JSON(), nullable=False),
        *_timestamps(),
    )

    # Uniqueness holds among active (non-deleted) rows only
    op.create_index('uq_properties_active_identity', 'properties', ['name', 'type'], unique=True,
                    postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS)
    op.create_index('uq_events_active_identity', 'events', ['name', 'type'], unique=True,
                    postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS)
    op.create_index('uq_tracking_plans_active_name', 'tracking_plans', ['name'], unique=True,
                    postgresql_where=ACTIVE_ROWS, sqlite_where=ACTIVE_ROWS)

    op.create_index('idx_properties_created', 'properties', ['created_at'])
    op.create_index('idx_events_created', 'events', ['created_at'])
    op.create_index('idx_tracking_plans_created', 'tracking_plans', ['created_at'])


def downgrade():
    op.drop_table('tracking_plans')
    op.drop_table('events')
    op.drop_table('properties')
