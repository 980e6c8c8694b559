"""Baseline: owners, properties, interval catalog and components.

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates:
- profiles
- properties
- maintenance_intervals
- components (with the active/next_maintenance index used by the sweep)
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ==========================================================================
    # profiles
    # ==========================================================================
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('country', sa.String(2), server_default='AT', nullable=False),
        sa.Column('email_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('push_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_profiles_email'),
    )

    # ==========================================================================
    # properties
    # ==========================================================================
    op.create_table(
        'properties',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('postal_code', sa.String(10), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('country', sa.String(2), server_default='AT', nullable=False),
        sa.Column('property_type', sa.String(30), server_default='house', nullable=False),
        sa.Column('build_year', sa.Integer(), nullable=True),
        sa.Column('living_area', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_properties_user', 'properties', ['user_id'])

    # ==========================================================================
    # maintenance_intervals
    # ==========================================================================
    op.create_table(
        'maintenance_intervals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('component', sa.String(255), nullable=False),
        sa.Column('interval_months', sa.Integer(), nullable=False),
        sa.Column('is_legal_requirement', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('legal_reference', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cost_min', sa.Numeric(10, 2), nullable=True),
        sa.Column('cost_max', sa.Numeric(10, 2), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    # ==========================================================================
    # components
    # ==========================================================================
    op.create_table(
        'components',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_id', sa.Uuid(), nullable=False),
        sa.Column('interval_id', sa.Uuid(), nullable=False),
        sa.Column('custom_name', sa.String(255), nullable=True),
        sa.Column('brand', sa.String(100), nullable=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('last_maintenance', sa.Date(), nullable=True),
        sa.Column('next_maintenance', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['interval_id'], ['maintenance_intervals.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_components_property', 'components', ['property_id'])
    op.create_index('idx_components_active_next', 'components', ['is_active', 'next_maintenance'])


def downgrade() -> None:
    op.drop_index('idx_components_active_next', table_name='components')
    op.drop_index('idx_components_property', table_name='components')
    op.drop_table('components')
    op.drop_table('maintenance_intervals')
    op.drop_index('idx_properties_user', table_name='properties')
    op.drop_table('properties')
    op.drop_table('profiles')
