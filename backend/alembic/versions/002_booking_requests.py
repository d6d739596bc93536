"""Add booking requests

Revision ID: 002_booking_requests
Revises: 001_initial
Create Date: 2026-10-19

Adds:
- booking_requests_status_enum with the eleven pipeline statuses
- booking_requests table, one row per (property, tenant) pair
"""

from alembic import op

revision = '002_booking_requests'
down_revision = '001_initial'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Databases that already carry the type keep it
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE booking_requests_status_enum AS ENUM (
                'new', 'contacting', 'kyc_referencing', 'approved_viewing',
                'viewing', 'contract', 'deposit', 'full_payment',
                'move_in', 'rented', 'cancel_booking'
            );
        EXCEPTION
            WHEN duplicate_object THEN NULL;
        END $$;
    """)

    # Raw SQL so the enum is not created a second time
    op.execute("""
        CREATE TABLE booking_requests (
            id UUID PRIMARY KEY,
            property_id UUID NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            tenant_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status booking_requests_status_enum NOT NULL DEFAULT 'new',
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_booking_requests_property_tenant UNIQUE (property_id, tenant_id)
        )
    """)

    op.create_index('ix_booking_requests_property_id', 'booking_requests', ['property_id'])
    op.create_index('ix_booking_requests_tenant_id', 'booking_requests', ['tenant_id'])
    op.create_index('ix_booking_requests_status', 'booking_requests', ['status'])


def downgrade() -> None:
    op.drop_index('ix_booking_requests_status')
    op.drop_index('ix_booking_requests_tenant_id')
    op.drop_index('ix_booking_requests_property_id')
    op.drop_table('booking_requests')

    op.execute('DROP TYPE IF EXISTS booking_requests_status_enum')
