from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


ACTIVE_BOOKING_PREDICATE = "status <> 'cancelled'"


class BookingModel(Base):
    __tablename__ = 'bookings'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True
    )
    cinema_id: Mapped[int] = mapped_column(Integer, ForeignKey('cinemas.id'), nullable=False)
    seat_id: Mapped[int] = mapped_column(Integer, ForeignKey('seats.id'), nullable=False)
    show_date: Mapped[date] = mapped_column(Date, nullable=False)
    show_time: Mapped[str] = mapped_column(String(10), nullable=False)
    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        # At most one non-cancelled booking per showing
        Index(
            'uq_bookings_active_showing',
            'seat_id',
            'show_date',
            'show_time',
            unique=True,
            postgresql_where=text(ACTIVE_BOOKING_PREDICATE),
            sqlite_where=text(ACTIVE_BOOKING_PREDICATE),
        ),
        Index('ix_bookings_user_booking_date', 'user_id', 'booking_date'),
    )

    def __repr__(self):
        return f'<BookingModel(id={self.id}, seat_id={self.seat_id}, status={self.status})>'
