"""ORM model <-> domain entity conversion shared by the repositories"""

from src.service.cinema_booking.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    PaymentStatus,
)
from src.service.cinema_booking.domain.entity.cinema_entity import Cinema
from src.service.cinema_booking.domain.entity.email_verification_entity import EmailVerification
from src.service.cinema_booking.domain.entity.payment_entity import (
    Payment,
    PaymentMethod,
    PaymentMethodType,
    TransactionStatus,
)
from src.service.cinema_booking.domain.entity.seat_entity import (
    Seat,
    SeatAvailability,
    SeatType,
)
from src.service.cinema_booking.domain.entity.user_entity import UserEntity
from src.service.cinema_booking.driven_adapter.model import (
    BookingModel,
    CinemaModel,
    EmailVerificationModel,
    PaymentMethodModel,
    PaymentModel,
    SeatAvailabilityModel,
    SeatModel,
    UserModel,
)


def cinema_to_entity(model: CinemaModel) -> Cinema:
    return Cinema(
        id=model.id,
        name=model.name,
        city=model.city,
        location=model.location,
        address=model.address,
        total_seats=model.total_seats,
        image_url=model.image_url,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def seat_to_entity(model: SeatModel) -> Seat:
    return Seat(
        id=model.id,
        cinema_id=model.cinema_id,
        seat_number=model.seat_number,
        row_number=model.row_number,
        seat_type=SeatType(model.seat_type),
        price=model.price,
        created_at=model.created_at,
    )


def seat_availability_to_entity(
    model: SeatAvailabilityModel, seat: SeatModel | None = None
) -> SeatAvailability:
    return SeatAvailability(
        id=model.id,
        cinema_id=model.cinema_id,
        seat_id=model.seat_id,
        show_date=model.show_date,
        show_time=model.show_time,
        is_available=model.is_available,
        seat=seat_to_entity(seat) if seat is not None else None,
        updated_at=model.updated_at,
    )


def booking_to_entity(model: BookingModel) -> Booking:
    return Booking(
        id=model.id,
        user_id=model.user_id,
        cinema_id=model.cinema_id,
        seat_id=model.seat_id,
        show_date=model.show_date,
        show_time=model.show_time,
        total_price=model.total_price,
        payment_method=model.payment_method,
        status=BookingStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        booking_date=model.booking_date,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def payment_to_entity(model: PaymentModel) -> Payment:
    return Payment(
        id=model.id,
        booking_id=model.booking_id,
        user_id=model.user_id,
        amount=model.amount,
        payment_method=model.payment_method,
        transaction_id=model.transaction_id,
        status=TransactionStatus(model.status),
        created_at=model.created_at,
    )


def payment_method_to_entity(model: PaymentMethodModel) -> PaymentMethod:
    return PaymentMethod(
        id=model.id,
        name=model.name,
        type=PaymentMethodType(model.type),
        is_active=model.is_active,
    )


def user_to_entity(model: UserModel) -> UserEntity:
    return UserEntity(
        id=model.id,
        username=model.username,
        email=model.email,
        hashed_password=model.hashed_password,
        is_verified=model.is_verified,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def email_verification_to_entity(model: EmailVerificationModel) -> EmailVerification:
    return EmailVerification(
        id=model.id,
        user_id=model.user_id,
        email=model.email,
        otp_code=model.otp_code,
        expires_at=model.expires_at,
        is_verified=model.is_verified,
        created_at=model.created_at,
    )
