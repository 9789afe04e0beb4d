"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from datetime import time
from decimal import Decimal

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


STARTER_TRAINS = [
    ("12951", "Mumbai Rajdhani", "New Delhi", "Mumbai Central", time(16, 55), time(8, 35), 120, Decimal("2875.00")),
    ("12952", "New Delhi Rajdhani", "Mumbai Central", "New Delhi", time(17, 0), time(8, 32), 120, Decimal("2875.00")),
    ("12301", "Howrah Rajdhani", "New Delhi", "Howrah Junction", time(16, 50), time(9, 55), 96, Decimal("3120.00")),
    ("12627", "Karnataka Express", "New Delhi", "KSR Bengaluru", time(20, 20), time(13, 40), 200, Decimal("1450.00")),
    ("12007", "Mysuru Shatabdi", "MGR Chennai Central", "Mysuru Junction", time(6, 0), time(13, 0), 64, Decimal("1165.00")),
    ("22119", "Mumbai Tejas", "Mumbai CSMT", "Madgaon", time(5, 50), time(14, 40), 0, Decimal("1590.00")),
]


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('email', name='users_email_key'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    trains = op.create_table('trains',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('train_number', sa.String(length=32), nullable=False),
        sa.Column('train_name', sa.String(length=255), nullable=False),
        sa.Column('from_station', sa.String(length=128), nullable=False),
        sa.Column('to_station', sa.String(length=128), nullable=False),
        sa.Column('departure_time', sa.Time(), nullable=False),
        sa.Column('arrival_time', sa.Time(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price_per_seat', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('available_seats >= 0', name='ck_trains_available_seats'),
        sa.CheckConstraint('price_per_seat >= 0', name='ck_trains_price_per_seat'),
        sa.UniqueConstraint('train_number', name='trains_train_number_key'),
    )
    op.create_index('ix_trains_train_number', 'trains', ['train_number'], unique=False)
    op.create_index('ix_trains_from_station', 'trains', ['from_station'], unique=False)
    op.create_index('ix_trains_to_station', 'trains', ['to_station'], unique=False)

    op.create_table('bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('train_id', sa.Integer(), nullable=False),
        sa.Column('passenger_name', sa.String(length=100), nullable=False),
        sa.Column('passenger_age', sa.Integer(), nullable=False),
        sa.Column('passenger_email', sa.String(length=255), nullable=False),
        sa.Column('seat_number', sa.String(length=4), nullable=False),
        sa.Column('journey_date', sa.Date(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('booking_reference', sa.String(length=64), nullable=False),
        sa.Column('booking_status', sa.String(length=50), nullable=False, server_default='confirmed'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['train_id'], ['trains.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'], unique=False)
    op.create_index('ix_bookings_train_id', 'bookings', ['train_id'], unique=False)
    op.create_index('ix_bookings_booking_reference', 'bookings', ['booking_reference'], unique=False)
    op.create_index('ix_bookings_user_created', 'bookings', ['user_id', 'created_at'], unique=False)

    op.bulk_insert(trains, [
        {
            'train_number': number,
            'train_name': name,
            'from_station': origin,
            'to_station': destination,
            'departure_time': departs,
            'arrival_time': arrives,
            'available_seats': seats,
            'price_per_seat': price,
        }
        for number, name, origin, destination, departs, arrives, seats, price in STARTER_TRAINS
    ])


def downgrade():
    op.drop_index('ix_bookings_user_created', table_name='bookings')
    op.drop_index('ix_bookings_booking_reference', table_name='bookings')
    op.drop_index('ix_bookings_train_id', table_name='bookings')
    op.drop_index('ix_bookings_user_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_trains_to_station', table_name='trains')
    op.drop_index('ix_trains_from_station', table_name='trains')
    op.drop_index('ix_trains_train_number', table_name='trains')
    op.drop_table('trains')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
