"""initial kit inventory schema

Revision ID: b7c1d2e3f4a5
Revises:
Create Date: 2026-10-17 00:00:00.000000

Creates:
- kits: serial-numbered inventory units and per-order sold aggregates
- cod_orders: cash-on-delivery orders
- return_tickets: refund / replacement requests
- users: operator credentials
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7c1d2e3f4a5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'kits',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('serial_numbers', sa.JSON(), nullable=False),
        sa.Column('batch_numbers', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('order_id', sa.String(length=64), nullable=False),
        sa.Column('invoice_url', sa.String(length=512), nullable=False),
        sa.Column('invoice_id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_kits_status', 'kits', ['status'])
    op.create_index('ix_kits_order_id', 'kits', ['order_id'])
    op.create_index('ix_kits_status_id', 'kits', ['status', 'id'])

    op.create_table(
        'cod_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.String(length=64), nullable=False),
        sa.Column('order_no', sa.String(length=64), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=True),
        sa.Column('customer_email', sa.String(length=255), nullable=True),
        sa.Column('customer_phone', sa.String(length=32), nullable=True),
        sa.Column('invoice_id', sa.String(length=64), nullable=True),
        sa.Column('invoice_url', sa.String(length=512), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_cod_orders_order_id', 'cod_orders', ['order_id'])
    op.create_index('ix_cod_orders_status', 'cod_orders', ['status'])

    op.create_table(
        'return_tickets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.String(length=64), nullable=False),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=True),
        sa.Column('customer_phone', sa.String(length=32), nullable=True),
        sa.Column('ticket_type', sa.String(length=16), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_return_tickets_order_id', 'return_tickets', ['order_id'])
    op.create_index('ix_return_tickets_status', 'return_tickets', ['status'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)


def downgrade():
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_return_tickets_status', table_name='return_tickets')
    op.drop_index('ix_return_tickets_order_id', table_name='return_tickets')
    op.drop_table('return_tickets')
    op.drop_index('ix_cod_orders_status', table_name='cod_orders')
    op.drop_index('ix_cod_orders_order_id', table_name='cod_orders')
    op.drop_table('cod_orders')
    op.drop_index('ix_kits_status_id', table_name='kits')
    op.drop_index('ix_kits_order_id', table_name='kits')
    op.drop_index('ix_kits_status', table_name='kits')
    op.drop_table('kits')
