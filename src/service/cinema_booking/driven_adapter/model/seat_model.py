from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.cinema_booking.driven_adapter.model.cinema_model import CinemaModel


class SeatModel(Base):
    __tablename__ = 'seats'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cinema_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('cinemas.id', ondelete='CASCADE'), nullable=False, index=True
    )
    seat_number: Mapped[str] = mapped_column(String(10), nullable=False)
    row_number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[str] = mapped_column(String(20), nullable=False, default='standard')
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    cinema: Mapped['CinemaModel'] = relationship(
        'CinemaModel', back_populates='seats', lazy='noload'
    )

    __table_args__ = (UniqueConstraint('cinema_id', 'seat_number', name='uq_seats_cinema_seat'),)


class SeatAvailabilityModel(Base):
    __tablename__ = 'seat_availability'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cinema_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('cinemas.id', ondelete='CASCADE'), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('seats.id', ondelete='CASCADE'), nullable=False
    )
    show_date: Mapped[date] = mapped_column(Date, nullable=False)
    show_time: Mapped[str] = mapped_column(String(10), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    seat: Mapped['SeatModel'] = relationship('SeatModel', lazy='noload')

    __table_args__ = (
        UniqueConstraint(
            'seat_id', 'show_date', 'show_time', name='uq_seat_availability_showing'
        ),
    )
