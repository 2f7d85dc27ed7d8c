"""Create users, properties, tenancies, invoices and expenses

Revision ID: 20240801_000001
Revises: None
Create Date: 2024-08-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20240801_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('roles', sa.String(length=50), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'property_owners',
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint('property_id', 'user_id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_property_owners_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_property_owners_user_id', ondelete='CASCADE'),
    )

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('fixed_monthly_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('pays_utilities', sa.Boolean(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_tenants_user_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_tenants_property_id', ondelete='NO ACTION'),
    )
    op.create_index('ix_tenants_user_id', 'tenants', ['user_id'])
    op.create_index('ix_tenants_property_id', 'tenants', ['property_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('month', sa.String(length=7), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('utilities_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('total_due', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('pending', 'partial', 'paid', name='invoice_status'),
            nullable=False,
            server_default='pending'
        ),
        sa.Column('submitted_payment_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('payment_proof_url', sa.String(length=2000), nullable=True),
        sa.Column('submission_date', sa.DateTime(), nullable=True),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'month', name='uq_invoices_tenant_month'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_invoices_tenant_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_invoices_user_id', ondelete='NO ACTION'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_invoices_property_id', ondelete='NO ACTION'),
    )

    # Create indexes for common queries
    op.create_index('ix_invoices_tenant_id', 'invoices', ['tenant_id'])
    op.create_index('ix_invoices_user_id', 'invoices', ['user_id'])
    op.create_index('ix_invoices_property_id', 'invoices', ['property_id'])
    op.create_index('ix_invoices_month', 'invoices', ['month'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.Enum('fixed_service', 'maintenance_other', name='expense_type'), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_expenses_property_id', ondelete='CASCADE'),
    )
    op.create_index('ix_expenses_property_id', 'expenses', ['property_id'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_expenses_property_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('ix_invoices_status', table_name='invoices')
    op.drop_index('ix_invoices_month', table_name='invoices')
    op.drop_index('ix_invoices_property_id', table_name='invoices')
    op.drop_index('ix_invoices_user_id', table_name='invoices')
    op.drop_index('ix_invoices_tenant_id', table_name='invoices')
    op.drop_table('invoices')
    op.drop_index('ix_tenants_property_id', table_name='tenants')
    op.drop_index('ix_tenants_user_id', table_name='tenants')
    op.drop_table('tenants')
    op.drop_table('property_owners')
    op.drop_table('properties')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
