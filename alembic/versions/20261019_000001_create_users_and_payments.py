"""Create users and payments tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Account records and the payment records reviewed by employees.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users and payments tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=True),
        sa.Column('password', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('account_number', sa.String(34), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, server_default='customer'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_email', sa.String(255), nullable=False),
        sa.Column('receiver_email', sa.String(255), nullable=False),
        sa.Column('account_number', sa.String(34), nullable=False),
        sa.Column('account_info', sa.String(34), nullable=False),
        sa.Column('provider', sa.String(100), nullable=False),
        sa.Column('swift_code', sa.String(11), nullable=False),
        sa.Column('amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('reason', sa.String(255), nullable=False, server_default='Pending verification'),
        sa.Column('submitted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('swift_response', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount >= 0', name='ck_payments_amount_non_negative'),
    )

    # Indexes for the review list filters
    op.create_index('ix_payments_sender_email', 'payments', ['sender_email'])
    op.create_index('ix_payments_receiver_email', 'payments', ['receiver_email'])
    op.create_index('ix_payments_verified', 'payments', ['verified'])
    op.create_index('ix_payments_created_at', 'payments', ['created_at'])


def downgrade() -> None:
    """Drop the payments and users tables."""
    op.drop_index('ix_payments_created_at', table_name='payments')
    op.drop_index('ix_payments_verified', table_name='payments')
    op.drop_index('ix_payments_receiver_email', table_name='payments')
    op.drop_index('ix_payments_sender_email', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
