"""Initial rental marketplace schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Users, buildings, properties, preferences, tenant CVs and shortlists.
Only properties.title is mandatory on a listing.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False, index=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('role', sa.Enum('tenant', 'operator', 'admin', name='users_role_enum'), nullable=False, index=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('nationality', sa.String(100), nullable=True),
        sa.Column('occupation', sa.String(255), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('avatar_url', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # === BUILDINGS ===
    op.create_table(
        'buildings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('operator_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('number_of_units', sa.Integer(), nullable=True),
        sa.Column('type_of_unit', postgresql.JSONB(), nullable=True),
        sa.Column('building_type', sa.String(100), nullable=True),
        sa.Column('logo', sa.String(1000), nullable=True),
        sa.Column('video', sa.String(1000), nullable=True),
        sa.Column('photos', postgresql.JSONB(), nullable=True),
        sa.Column('documents', sa.Text(), nullable=True),
        sa.Column('metro_stations', postgresql.JSONB(), nullable=True),
        sa.Column('commute_times', postgresql.JSONB(), nullable=True),
        sa.Column('local_essentials', postgresql.JSONB(), nullable=True),
        sa.Column('amenities', postgresql.JSONB(), nullable=True),
        sa.Column('is_concierge', sa.Boolean(), nullable=True),
        sa.Column('concierge_hours', postgresql.JSONB(), nullable=True),
        sa.Column('pet_policy', sa.Boolean(), nullable=True),
        sa.Column('pets', postgresql.JSONB(), nullable=True),
        sa.Column('smoking_area', sa.Boolean(), nullable=True),
        sa.Column('tenant_types', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # === PROPERTIES ===
    op.create_table(
        'properties',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('building_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('buildings.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('operator_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('apartment_number', sa.String(50), nullable=True),
        sa.Column('descriptions', sa.Text(), nullable=True),
        sa.Column('property_type', sa.String(50), nullable=True),
        sa.Column('building_type', sa.String(100), nullable=True),
        sa.Column('furnishing', sa.String(50), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('floor', sa.Integer(), nullable=True),
        sa.Column('square_meters', sa.Numeric(10, 2), nullable=True),
        sa.Column('outdoor_space', sa.Boolean(), nullable=True),
        sa.Column('balcony', sa.Boolean(), nullable=True),
        sa.Column('terrace', sa.Boolean(), nullable=True),
        sa.Column('luxury', sa.Boolean(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('deposit', sa.Numeric(10, 2), nullable=True),
        sa.Column('bills', sa.String(50), nullable=True, server_default='excluded'),
        sa.Column('let_duration', sa.String(50), nullable=True),
        sa.Column('available_from', sa.Date(), nullable=True),
        sa.Column('photos', postgresql.JSONB(), nullable=True),
        sa.Column('video', sa.String(1000), nullable=True),
        sa.Column('documents', sa.Text(), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('tenant_types', postgresql.JSONB(), nullable=True),
        sa.Column('amenities', postgresql.JSONB(), nullable=True),
        sa.Column('is_concierge', sa.Boolean(), nullable=True),
        sa.Column('concierge_hours', postgresql.JSONB(), nullable=True),
        sa.Column('pet_policy', sa.Boolean(), nullable=True),
        sa.Column('pets', postgresql.JSONB(), nullable=True),
        sa.Column('smoking_area', sa.Boolean(), nullable=True),
        sa.Column('metro_stations', postgresql.JSONB(), nullable=True),
        sa.Column('commute_times', postgresql.JSONB(), nullable=True),
        sa.Column('local_essentials', postgresql.JSONB(), nullable=True),
        sa.Column('lifestyle_features', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # === PREFERENCES ===
    op.create_table(
        'preferences',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('preferred_address', sa.String(500), nullable=True),
        sa.Column('preferred_areas', postgresql.JSONB(), nullable=True),
        sa.Column('preferred_districts', postgresql.JSONB(), nullable=True),
        sa.Column('preferred_metro_stations', postgresql.JSONB(), nullable=True),
        sa.Column('move_in_date', sa.Date(), nullable=True),
        sa.Column('move_out_date', sa.Date(), nullable=True),
        sa.Column('min_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('max_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('deposit_preference', sa.String(10), nullable=True),
        sa.Column('property_types', postgresql.JSONB(), nullable=True),
        sa.Column('bedrooms', postgresql.JSONB(), nullable=True),
        sa.Column('bathrooms', postgresql.JSONB(), nullable=True),
        sa.Column('min_bedrooms', sa.Integer(), nullable=True),
        sa.Column('max_bedrooms', sa.Integer(), nullable=True),
        sa.Column('min_bathrooms', sa.Integer(), nullable=True),
        sa.Column('max_bathrooms', sa.Integer(), nullable=True),
        sa.Column('furnishing', postgresql.JSONB(), nullable=True),
        sa.Column('outdoor_space', sa.Boolean(), nullable=True),
        sa.Column('balcony', sa.Boolean(), nullable=True),
        sa.Column('terrace', sa.Boolean(), nullable=True),
        sa.Column('min_square_meters', sa.Numeric(10, 2), nullable=True),
        sa.Column('max_square_meters', sa.Numeric(10, 2), nullable=True),
        sa.Column('building_types', postgresql.JSONB(), nullable=True),
        sa.Column('let_duration', sa.String(50), nullable=True),
        sa.Column('bills', sa.String(50), nullable=True),
        sa.Column('tenant_types', postgresql.JSONB(), nullable=True),
        sa.Column('pet_policy', sa.Boolean(), nullable=True),
        sa.Column('pets', postgresql.JSONB(), nullable=True),
        sa.Column('number_of_pets', sa.Integer(), nullable=True),
        sa.Column('amenities', postgresql.JSONB(), nullable=True),
        sa.Column('is_concierge', sa.Boolean(), nullable=True),
        sa.Column('smoking_area', sa.Boolean(), nullable=True),
        sa.Column('hobbies', postgresql.JSONB(), nullable=True),
        sa.Column('ideal_living_environment', postgresql.JSONB(), nullable=True),
        sa.Column('lifestyle_features', postgresql.JSONB(), nullable=True),
        sa.Column('smoker', sa.String(50), nullable=True),
        sa.Column('occupation', sa.String(255), nullable=True),
        sa.Column('family_status', sa.String(100), nullable=True),
        sa.Column('children_count', sa.String(50), nullable=True),
        sa.Column('kyc_status', sa.String(50), nullable=True),
        sa.Column('referencing_status', sa.String(50), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # === TENANT CVS ===
    op.create_table(
        'tenant_cvs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('share_uuid', postgresql.UUID(as_uuid=True), unique=True, nullable=True),
        sa.Column('headline', sa.String(255), nullable=True),
        sa.Column('about_me', sa.Text(), nullable=True),
        sa.Column('hobbies', postgresql.JSONB(), nullable=True),
        sa.Column('rent_history', postgresql.JSONB(), nullable=True),
        sa.Column('kyc_status', sa.String(50), nullable=True),
        sa.Column('referencing_status', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # === SHORTLIST ===
    op.create_table(
        'shortlist_entries',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('property_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'property_id', name='uq_shortlist_user_property'),
    )


def downgrade() -> None:
    op.drop_table('shortlist_entries')
    op.drop_table('tenant_cvs')
    op.drop_table('preferences')
    op.drop_table('properties')
    op.drop_table('buildings')
    op.drop_table('users')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS users_role_enum')
