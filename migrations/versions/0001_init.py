"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('flats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(length=512), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('carpark', sa.Boolean(), nullable=True),
        sa.Column('vacant', sa.Boolean(), nullable=False),
        sa.Column('inspection_date', sa.DateTime(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('tenant_name', sa.String(length=255), nullable=True),
        sa.Column('tenant_email', sa.String(length=255), nullable=True),
        sa.Column('tenant_phone', sa.String(length=50), nullable=True),
        sa.Column('tenant_move_in_date', sa.DateTime(), nullable=True),
        sa.Column('tenant_rent_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_flats_user_id', 'flats', ['user_id'])

    op.create_table('invoices',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('flat_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('tenant_name', sa.String(length=255), nullable=True),
        sa.Column('tenant_email', sa.String(length=255), nullable=True),
        sa.Column('flat_title', sa.String(length=255), nullable=True),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.Column('issue_date', sa.DateTime(), nullable=False),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(['flat_id'], ['flats.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_invoices_flat_id', 'invoices', ['flat_id'])

    op.create_table('payment_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('flat_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_date', sa.DateTime(), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('invoice_id', sa.Integer(), nullable=True),
        sa.Column('recorded_date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['flat_id'], ['flats.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_payment_logs_flat_id', 'payment_logs', ['flat_id'])

    op.create_table('maintenance_reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('flat_id', sa.Integer(), nullable=False),
        sa.Column('issue_type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(length=20), nullable=False),
        sa.Column('contractor_id', sa.String(length=20), nullable=False),
        sa.Column('contractor_name', sa.String(length=200), nullable=True),
        sa.Column('contractor_phone', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('estimated_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('scheduled_date', sa.DateTime(), nullable=True),
        sa.Column('reported_date', sa.DateTime(), nullable=False),
        sa.Column('completion_date', sa.DateTime(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['flat_id'], ['flats.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_maintenance_reports_flat_id', 'maintenance_reports', ['flat_id'])

    op.create_table('tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('flat_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('move_in_date', sa.DateTime(), nullable=True),
        sa.Column('move_out_date', sa.DateTime(), nullable=True),
        sa.Column('rent_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('deposit_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=200), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=50), nullable=True),
        sa.Column('emergency_contact_relationship', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['flat_id'], ['flats.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tenants_user_id', 'tenants', ['user_id'])
    op.create_index('ix_tenants_flat_id', 'tenants', ['flat_id'])


def downgrade():
    op.drop_table('tenants')
    op.drop_table('maintenance_reports')
    op.drop_table('payment_logs')
    op.drop_table('invoices')
    op.drop_table('flats')
    op.drop_table('users')
