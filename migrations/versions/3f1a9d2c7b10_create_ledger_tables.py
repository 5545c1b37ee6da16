"""create ledger tables

Revision ID: 3f1a9d2c7b10
Revises:
Create Date: 2026-10-17 10:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9d2c7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone_no', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.UniqueConstraint('name', name='uq_users_name'),
        sa.UniqueConstraint('phone_no', name='uq_users_phone_no'),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'trips',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.UniqueConstraint('name', name='uq_trips_name'),
    )
    op.create_index('ix_trips_id', 'trips', ['id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('trip_id', sa.Integer(), nullable=False),
        sa.Column('paid_by', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(
            ['trip_id'],
            ['trips.id'],
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_transactions_id', 'transactions', ['id'])
    op.create_index('ix_transactions_trip_id', 'transactions', ['trip_id'])
    op.create_index('ix_transactions_paid_by', 'transactions', ['paid_by'])

    op.create_table(
        'contributions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transaction_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_done', sa.Boolean(), nullable=False, server_default=sa.false()),

        sa.ForeignKeyConstraint(
            ['transaction_id'],
            ['transactions.id'],
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_contributions_transaction_id', 'contributions', ['transaction_id'])
    op.create_index('ix_contributions_user_id', 'contributions', ['user_id'])


def downgrade() -> None:
    op.drop_table('contributions')
    op.drop_table('transactions')
    op.drop_table('trips')
    op.drop_table('users')
