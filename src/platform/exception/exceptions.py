from typing import ClassVar


class CustomBaseError(Exception):
    """
    Base class for expected failures.

    `status_code` is the HTTP status the handlers answer with; `result` is the
    label recorded on the booking/payment metrics. Below 500, `@Logger.io`
    logs these without a traceback.
    """

    default_status_code: ClassVar[int] = 500
    result: ClassVar[str] = 'error'

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code or self.default_status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    """Invalid input: malformed date, amount mismatch, unknown payment method..."""

    default_status_code = 400
    result = 'invalid'


class LoginError(CustomBaseError):
    default_status_code = 400
    result = 'invalid'


class AuthenticationError(CustomBaseError):
    default_status_code = 401
    result = 'unauthenticated'


class ForbiddenError(CustomBaseError):
    """Authenticated, but not the owner of the resource."""

    default_status_code = 403
    result = 'forbidden'


class NotFoundError(CustomBaseError):
    default_status_code = 404
    result = 'not_found'


class ConflictError(CustomBaseError):
    """The showing is already claimed, or the record already exists."""

    default_status_code = 409
    result = 'conflict'


class StorageError(CustomBaseError):
    """Storage I/O or transaction failure. Not retried here; the caller may retry the request."""

    default_status_code = 500
    result = 'error'
