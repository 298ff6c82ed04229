"""
Unit tests for the log redaction helpers and the Logger.io decorator
"""

from decimal import Decimal

from pydantic import SecretStr
import pytest

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import MASK, access_log_level
from src.platform.logging.loguru_io_utils import redact, truncate_content
from src.service.cinema_booking.domain.entity.user_entity import UserEntity


@pytest.mark.unit
class TestRedact:
    def test_masks_sensitive_keys_at_any_depth(self):
        data = {'email': 'a@b.c', 'payload': {'password': 'P@ssw0rd', 'otp_code': '123456'}}

        assert redact(data) == {
            'email': 'a@b.c',
            'payload': {'password': MASK, 'otp_code': MASK},
        }

    def test_key_match_is_case_insensitive(self):
        assert redact({'Password': 'x'}) == {'Password': MASK}

    def test_masks_inside_repr_strings(self):
        masked = redact("LoginRequest(username='alice', password='P@ssw0rd')")

        assert 'P@ssw0rd' not in masked
        assert "username='alice'" in masked

    def test_walks_attrs_entities(self):
        user = UserEntity(
            username='alice', email='alice@example.com', hashed_password='$2b$12$hash'
        )

        redacted = redact(user)['UserEntity']

        assert redacted['hashed_password'] == MASK
        assert redacted['username'] == 'alice'

    def test_secret_str_is_masked(self):
        assert redact(SecretStr('s3cret')) == MASK

    @pytest.mark.parametrize('value', [None, 7, 1.5, True, Decimal('70000.00')])
    def test_scalars_pass_through(self, value):
        assert redact(value) == value

    def test_sequences_keep_their_type(self):
        assert redact(({'token': 'abc'},)) == ({'token': MASK},)


@pytest.mark.unit
def test_truncate_content_shortens_long_text():
    text = 'x' * 1500

    result = truncate_content(text)

    assert result.startswith('x' * 1000)
    assert result.endswith('...(+500 chars)')
    assert truncate_content('short') == 'short'


@pytest.mark.unit
@pytest.mark.parametrize(
    ('line', 'level'),
    [
        ('127.0.0.1 - "GET /api/cinemas HTTP/1.1" - 200 - 8ms', 'SUCCESS'),
        ('127.0.0.1 - "GET /api/cinemas HTTP/1.1" - 304 - 1ms', 'WARNING'),
        ('127.0.0.1 - "POST /api/bookings HTTP/1.1" - 409 - 8ms', 'ERROR'),
        ('127.0.0.1 - "POST /api/bookings HTTP/1.1" - 500 - 8ms', 'CRITICAL'),
        ('Started server process', None),
    ],
)
def test_access_log_level(line, level):
    assert access_log_level(line) == level


@pytest.mark.unit
class TestLoggerIO:
    def test_sync_function_returns_value(self):
        @Logger.io
        def add(a: int, b: int) -> int:
            return a + b

        assert add(1, b=2) == 3

    async def test_async_function_returns_value(self):
        @Logger.io
        async def double(value: int) -> int:
            return value * 2

        assert await double(21) == 42

    async def test_exception_is_reraised(self):
        @Logger.io
        async def book() -> None:
            raise ConflictError('seat is already booked for this date and time')

        with pytest.raises(ConflictError):
            await book()

    def test_reraise_disabled_returns_none(self):
        @Logger.io(reraise=False)
        def explode() -> int:
            raise RuntimeError('boom')

        assert explode() is None

    def test_signature_errors_still_surface(self):
        @Logger.io
        def one_arg(a: int) -> int:
            return a

        with pytest.raises(TypeError):
            one_arg(1, 2)  # type: ignore[call-arg]
