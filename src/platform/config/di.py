"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema_booking.driven_adapter.email.logging_email_sender import (
    LoggingEmailSender,
)
from src.service.cinema_booking.driven_adapter.notification.in_memory_booking_notifier import (
    InMemoryBookingNotifier,
)
from src.service.cinema_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.catalog_query_repo_impl import (
    CatalogQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.payment_method_query_repo_impl import (
    PaymentMethodQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.seat_availability_repo_impl import (
    SeatAvailabilityRepoImpl,
)
from src.service.cinema_booking.driven_adapter.repo.user_query_repo_impl import (
    UserQueryRepoImpl,
)
from src.service.cinema_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.cinema_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager)
    database = providers.Singleton(Database)

    # Unit of Work: a fresh instance per use-case call (inject `.provider`)
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Read-only repositories (stateless - short-lived session per call)
    catalog_query_repo = providers.Singleton(
        CatalogQueryRepoImpl, session_factory=database.provided.session
    )
    seat_availability_query_repo = providers.Singleton(
        SeatAvailabilityRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    payment_method_query_repo = providers.Singleton(
        PaymentMethodQueryRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth, settings=config_service)

    # Side channels
    email_sender = providers.Singleton(
        LoggingEmailSender, otp_expire_minutes=config_service.provided.OTP_EXPIRE_MINUTES
    )
    booking_notifier = providers.Singleton(
        InMemoryBookingNotifier, max_buffer_size=config_service.provided.NOTIFIER_BUFFER_SIZE
    )

    # Observability
    booking_metrics = providers.Object(metrics)


container = Container()


def setup() -> None:
    container.config_service()
    container.booking_notifier()


def cleanup() -> None:
    container.reset_singletons()
