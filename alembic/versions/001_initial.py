"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create tables table
    op.create_table(
        'tables',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('booking_seq', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('capacity > 0', name='ck_tables_capacity_positive'),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('table_id', sa.String(36), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(50), nullable=False),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('reserved_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('note', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('party_size BETWEEN 1 AND 20', name='ck_reservations_party_size'),
    )

    # Create conversations table
    op.create_table(
        'conversations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('wa_user_id', sa.String(100), unique=True, nullable=False),
        sa.Column('state', sa.String(50), nullable=False, server_default='idle'),
        sa.Column('party_size', sa.Integer()),
        sa.Column('reserved_at', sa.DateTime(timezone=True)),
        sa.Column('note', sa.Text()),
        sa.Column('customer_name', sa.String(255)),
        sa.Column('revision', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('conversation_id', sa.String(36), sa.ForeignKey('conversations.id')),
        sa.Column('provider', sa.String(50), nullable=False),
        sa.Column('direction', sa.String(10), nullable=False),
        sa.Column('external_id', sa.String(255)),
        sa.Column('wa_user_id', sa.String(100), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create webhook_events table
    op.create_table(
        'webhook_events',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider', sa.String(50), nullable=False),
        sa.Column('external_id', sa.String(255), nullable=False),
        sa.Column('payload', sa.Text()),
        sa.Column('received_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('provider', 'external_id', name='uq_webhook_events_provider_external_id'),
    )

    # Create indexes
    op.create_index('ix_reservations_table_reserved_at', 'reservations', ['table_id', 'reserved_at'])
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])

    # No two blocking reservations on one table may overlap
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')
        op.execute(
            """
            ALTER TABLE reservations
            ADD CONSTRAINT ex_reservations_table_window
            EXCLUDE USING gist (
                table_id WITH =,
                tsrange(
                    reserved_at AT TIME ZONE 'UTC',
                    (reserved_at AT TIME ZONE 'UTC') + interval '120 minutes'
                ) WITH &&
            )
            WHERE (status IN ('confirmed', 'seated'))
            """
        )


def downgrade() -> None:
    op.drop_table('webhook_events')
    op.drop_table('messages')
    op.drop_table('conversations')
    op.drop_table('reservations')
    op.drop_table('tables')
