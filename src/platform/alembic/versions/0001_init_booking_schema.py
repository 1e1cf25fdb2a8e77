"""init_booking_schema

Revision ID: 0001
Revises:
Create Date: 2026-03-01

Schema:
- room: Rooms with price, capacity, status and an ordered image list
- booking: Stays owned by a room (deleted with it), unique booking token
- otp_verification: Hashed one-time passcodes per (booking, email); no FK so
  expiry cleanup runs independently of bookings
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'room',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=True,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('room_id', UUID(as_uuid=True), nullable=False),
        sa.Column('check_in', sa.DateTime(timezone=True), nullable=False),
        sa.Column('check_out', sa.DateTime(timezone=True), nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('email_address', sa.String(length=255), nullable=False),
        sa.Column('guest_name', sa.String(length=200), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=False),
        sa.Column('booking_token', UUID(as_uuid=True), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['room_id'], ['room.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_room_id'), 'booking', ['room_id'], unique=False)
    op.create_index(op.f('ix_booking_email_address'), 'booking', ['email_address'], unique=False)
    op.create_index(op.f('ix_booking_booking_token'), 'booking', ['booking_token'], unique=True)

    op.create_table(
        'otp_verification',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=False),
        sa.Column('email_address', sa.String(length=255), nullable=False),
        sa.Column('code_hash', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('attempt_count', sa.Integer(), nullable=False),
        sa.Column('resend_count', sa.Integer(), nullable=False),
        sa.Column('invalidated', sa.Boolean(), nullable=False),
        sa.Column('invalidated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_otp_verification_key',
        'otp_verification',
        ['booking_id', 'email_address', 'created_at'],
        unique=False,
    )
    op.create_index(
        op.f('ix_otp_verification_expires_at'), 'otp_verification', ['expires_at'], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f('ix_otp_verification_expires_at'), table_name='otp_verification')
    op.drop_index('ix_otp_verification_key', table_name='otp_verification')
    op.drop_table('otp_verification')
    op.drop_index(op.f('ix_booking_booking_token'), table_name='booking')
    op.drop_index(op.f('ix_booking_email_address'), table_name='booking')
    op.drop_index(op.f('ix_booking_room_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_table('room')
