"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema_booking.driven_adapter.model.booking_model import BookingModel
from src.service.cinema_booking.driven_adapter.model.cinema_model import CinemaModel
from src.service.cinema_booking.driven_adapter.model.email_verification_model import (
    EmailVerificationModel,
)
from src.service.cinema_booking.driven_adapter.model.payment_model import (
    PaymentMethodModel,
    PaymentModel,
)
from src.service.cinema_booking.driven_adapter.model.seat_model import (
    SeatAvailabilityModel,
    SeatModel,
)
from src.service.cinema_booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'CinemaModel',
    'EmailVerificationModel',
    'PaymentMethodModel',
    'PaymentModel',
    'SeatAvailabilityModel',
    'SeatModel',
    'UserModel',
]
