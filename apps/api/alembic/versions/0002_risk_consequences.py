"""Risk consequence catalog.

Revision ID: 0002_risk_consequences
Revises: 0001_baseline
Create Date: 2026-10-20

Creates:
- risk_consequences (one row per component type and country)
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002_risk_consequences'
down_revision = '0001_baseline'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'risk_consequences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('component_type', sa.String(50), nullable=False),
        sa.Column('country', sa.String(2), server_default='AT', nullable=False),
        sa.Column('death_risk', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('injury_risk', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('insurance_void', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('criminal_liability', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('criminal_paragraph', sa.String(255), nullable=True),
        sa.Column('damage_cost_min', sa.Integer(), nullable=True),
        sa.Column('damage_cost_max', sa.Integer(), nullable=True),
        sa.Column('warning_yellow', sa.Text(), nullable=False),
        sa.Column('warning_orange', sa.Text(), nullable=False),
        sa.Column('warning_red', sa.Text(), nullable=False),
        sa.Column('warning_black', sa.Text(), nullable=False),
        sa.Column('real_case', sa.Text(), nullable=True),
        sa.Column('statistic', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('component_type', 'country', name='uq_risk_consequence_type_country'),
    )


def downgrade() -> None:
    op.drop_table('risk_consequences')
