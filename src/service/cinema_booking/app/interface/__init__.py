"""Application layer interfaces (Ports)"""

from src.service.cinema_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema_booking.app.interface.i_booking_notifier import (
    IBookingNotifier,
    NotificationKind,
)
from src.service.cinema_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.cinema_booking.app.interface.i_email_sender import IEmailSender
from src.service.cinema_booking.app.interface.i_email_verification_repo import (
    IEmailVerificationRepo,
)
from src.service.cinema_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema_booking.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.cinema_booking.app.interface.i_payment_method_query_repo import (
    IPaymentMethodQueryRepo,
)
from src.service.cinema_booking.app.interface.i_seat_availability_repo import (
    ISeatAvailabilityRepo,
)
from src.service.cinema_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema_booking.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingNotifier',
    'IBookingQueryRepo',
    'ICatalogQueryRepo',
    'IEmailSender',
    'IEmailVerificationRepo',
    'IPasswordHasher',
    'IPaymentCommandRepo',
    'IPaymentMethodQueryRepo',
    'ISeatAvailabilityRepo',
    'IUserCommandRepo',
    'IUserQueryRepo',
    'NotificationKind',
]
