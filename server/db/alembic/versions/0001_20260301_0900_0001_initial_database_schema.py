"""Initial database schema

Revision ID: 0001
Revises:
Create Date: 2026-03-01 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create tours table
    op.create_table('tours',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('tagline', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=128), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.Column('is_from', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('images', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('highlights', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('included', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('excluded', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('optional', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('itinerary_glance', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('what_to_bring', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('itinerary_detail', sa.Text(), server_default='', nullable=False),
        sa.Column('additional_info', sa.Text(), server_default='', nullable=False),
        sa.Column('pricing_tiers', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('itinerary', sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column('difficulty', sa.Text(), nullable=True),
        sa.Column('best_time', sa.Text(), nullable=True),
        sa.Column('map_url', sa.String(length=2048), nullable=True),
        sa.Column('featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tours_slug'), 'tours', ['slug'], unique=True)
    op.create_index(op.f('ix_tours_name'), 'tours', ['name'], unique=False)
    op.create_index(op.f('ix_tours_category'), 'tours', ['category'], unique=False)
    op.create_index(op.f('ix_tours_featured'), 'tours', ['featured'], unique=False)
    op.create_index(op.f('ix_tours_active'), 'tours', ['active'], unique=False)
    op.create_index(op.f('ix_tours_created_at'), 'tours', ['created_at'], unique=False)

    # Create trip_requests table; circuit_id has no foreign key
    op.create_table('trip_requests',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('circuit_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('circuit_name', sa.String(length=255), nullable=True),
        sa.Column('travel_dates', sa.String(length=255), nullable=False),
        sa.Column('guests', sa.Integer(), server_default='1', nullable=False),
        sa.Column('adults', sa.Integer(), nullable=True),
        sa.Column('children', sa.Integer(), nullable=True),
        sa.Column('infants', sa.Integer(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='new', nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('guests > 0', name='ck_trip_request_guests_positive'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_trip_requests_circuit_id'), 'trip_requests', ['circuit_id'], unique=False)
    op.create_index(op.f('ix_trip_requests_email'), 'trip_requests', ['email'], unique=False)
    op.create_index(op.f('ix_trip_requests_status'), 'trip_requests', ['status'], unique=False)
    op.create_index(op.f('ix_trip_requests_created_at'), 'trip_requests', ['created_at'], unique=False)

    # Create contact_messages table
    op.create_table('contact_messages',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=64), nullable=True),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='unread', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contact_messages_status'), 'contact_messages', ['status'], unique=False)
    op.create_index(op.f('ix_contact_messages_created_at'), 'contact_messages', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('contact_messages')
    op.drop_table('trip_requests')
    op.drop_table('tours')
