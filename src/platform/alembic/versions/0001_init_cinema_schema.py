"""init_cinema_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- users / email_verifications: accounts and OTP email verification
- cinemas / seats: catalog, seat price lives on the seat
- seat_availability: per-showing seat map (seat, date, time)
- bookings: one row per reserved seat, partial unique index on active showings
- payment_methods / payments: partial unique index on successful payments
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ACTIVE_BOOKING_PREDICATE = "status <> 'cancelled'"
SUCCESSFUL_PAYMENT_PREDICATE = "status = 'success'"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Accounts ==========

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'email_verifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('otp_code', sa.String(length=6), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_email_verifications_user_id'), 'email_verifications', ['user_id'], unique=False
    )
    op.create_index(
        op.f('ix_email_verifications_email'), 'email_verifications', ['email'], unique=False
    )

    # ========== Catalog ==========

    op.create_table(
        'cinemas',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('total_seats', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(length=500), nullable=False, server_default=''),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_cinemas_name'), 'cinemas', ['name'], unique=False)
    op.create_index(op.f('ix_cinemas_city'), 'cinemas', ['city'], unique=False)

    op.create_table(
        'seats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cinema_id', sa.Integer(), nullable=False),
        sa.Column('seat_number', sa.String(length=10), nullable=False),
        sa.Column('row_number', sa.Integer(), nullable=False),
        sa.Column('seat_type', sa.String(length=20), nullable=False, server_default='standard'),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cinema_id'], ['cinemas.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cinema_id', 'seat_number', name='uq_seats_cinema_seat'),
    )
    op.create_index(op.f('ix_seats_cinema_id'), 'seats', ['cinema_id'], unique=False)

    op.create_table(
        'seat_availability',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cinema_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('show_time', sa.String(length=10), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cinema_id'], ['cinemas.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['seat_id'], ['seats.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'seat_id', 'show_date', 'show_time', name='uq_seat_availability_showing'
        ),
    )
    op.create_index(
        op.f('ix_seat_availability_cinema_id'), 'seat_availability', ['cinema_id'], unique=False
    )

    # ========== Bookings & Payments ==========

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('cinema_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('show_time', sa.String(length=10), nullable=False),
        sa.Column(
            'booking_date',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column(
            'payment_status', sa.String(length=20), nullable=False, server_default='pending'
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['cinema_id'], ['cinemas.id']),
        sa.ForeignKeyConstraint(['seat_id'], ['seats.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(
        'ix_bookings_user_booking_date', 'bookings', ['user_id', 'booking_date'], unique=False
    )
    # At most one non-cancelled booking per showing
    op.create_index(
        'uq_bookings_active_showing',
        'bookings',
        ['seat_id', 'show_date', 'show_time'],
        unique=True,
        postgresql_where=sa.text(ACTIVE_BOOKING_PREDICATE),
        sqlite_where=sa.text(ACTIVE_BOOKING_PREDICATE),
    )

    op.create_table(
        'payment_methods',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('transaction_id', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_id'),
    )
    op.create_index(op.f('ix_payments_booking_id'), 'payments', ['booking_id'], unique=False)
    # At most one successful payment per booking
    op.create_index(
        'uq_payments_successful_booking',
        'payments',
        ['booking_id'],
        unique=True,
        postgresql_where=sa.text(SUCCESSFUL_PAYMENT_PREDICATE),
        sqlite_where=sa.text(SUCCESSFUL_PAYMENT_PREDICATE),
    )


def downgrade() -> None:
    op.drop_index('uq_payments_successful_booking', table_name='payments')
    op.drop_index(op.f('ix_payments_booking_id'), table_name='payments')
    op.drop_table('payments')
    op.drop_table('payment_methods')
    op.drop_index('uq_bookings_active_showing', table_name='bookings')
    op.drop_index('ix_bookings_user_booking_date', table_name='bookings')
    op.drop_index(op.f('ix_bookings_user_id'), table_name='bookings')
    op.drop_table('bookings')
    op.drop_index(op.f('ix_seat_availability_cinema_id'), table_name='seat_availability')
    op.drop_table('seat_availability')
    op.drop_index(op.f('ix_seats_cinema_id'), table_name='seats')
    op.drop_table('seats')
    op.drop_index(op.f('ix_cinemas_city'), table_name='cinemas')
    op.drop_index(op.f('ix_cinemas_name'), table_name='cinemas')
    op.drop_table('cinemas')
    op.drop_index(op.f('ix_email_verifications_email'), table_name='email_verifications')
    op.drop_index(op.f('ix_email_verifications_user_id'), table_name='email_verifications')
    op.drop_table('email_verifications')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
