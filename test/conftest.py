"""
Test Configuration and Fixtures

This module provides:
- Test environment (temp-file SQLite database, test log dir) set before app imports
- Database cleanup for integration tests
- Session-scoped TestClient over the test application

Architecture:
- Unit tests (test/**/unit/): mock repositories and the unit of work, no database
- Integration tests (test/**/integration/): real ORM on SQLite, tables recreated per test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru config read these at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_file = Path(tempfile.gettempdir()) / f'cinema_booking_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_file}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('SECRET_KEY', 'test_secret_key')
    os.environ.setdefault('REQUEST_TIMEOUT_SECONDS', '30')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from dotenv import load_dotenv  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402


# .env values never override the test database set above
load_dotenv('.env' if Path('.env').exists() else '.env.example', override=False)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'integration' in markers:
            item.fixturenames.append('clean_database')


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    from src.platform.database.orm_db_setting import (
        create_db_and_tables,
        dispose_engine,
        drop_db_and_tables,
    )

    await drop_db_and_tables()
    await create_db_and_tables()
    yield
    await dispose_engine()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Only tests that use the HTTP client carry cookies
    if 'client' not in request.fixturenames:
        yield
        return
    client: Any = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()
