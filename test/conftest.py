"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A fresh SQLite database file per test, injected through the DI container
- An httpx AsyncClient bound to the test app
- Helpers to register / log in accounts through the API

Architecture:
- Unit tests (`*_unit_test.py`): mocks only, no database
- Integration tests: real SQLite file under tmp_path, real repositories
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings are read at import time by src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Cheapest bcrypt cost; real hashes, fast tests
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['SECRET_KEY'] = 'test_secret_key_for_mealshare_test_suite'
    os.environ['DATABASE_URL'] = 'sqlite:///./test_mealshare.db'
    os.environ.setdefault('SQLITE_BUSY_TIMEOUT', '30')
    os.environ.setdefault('DB_OPERATION_TIMEOUT', '30')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.constant.route_constant import USER_LOGIN, USER_REGISTER  # noqa: E402
from src.platform.database.db_setting import Database  # noqa: E402

from test.constants import DEFAULT_PASSWORD  # noqa: E402
from test.utils import FakeClock  # noqa: E402


# =============================================================================
# Database
# =============================================================================
@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Fresh SQLite file per test, wired into the DI container"""
    db = Database(database_url=f'sqlite+aiosqlite:///{tmp_path / "mealshare_test.db"}')
    await db.create_db_and_tables()

    container.database.override(db)
    container.reset_singletons()  # repositories must pick up the overridden database
    container.wire(modules=WIRE_MODULES)
    try:
        yield db
    finally:
        container.unwire()
        container.database.reset_override()
        container.reset_singletons()
        await db.dispose()


# =============================================================================
# Clock
# =============================================================================
@pytest.fixture
def fake_clock(database: Database) -> Generator[FakeClock, None, None]:
    """Replace the reservation clock so cooldown windows can be crossed instantly"""
    clock = FakeClock()
    container.clock.override(providers.Object(clock))
    try:
        yield clock
    finally:
        container.clock.reset_override()


# =============================================================================
# HTTP client
# =============================================================================
@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the test app (lifespan replaced by the database fixture)"""
    from test.test_main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url='http://test') as async_client:
        yield async_client


# =============================================================================
# Account helpers
# =============================================================================
RegisterFn = Callable[..., Awaitable[dict[str, Any]]]
LoginFn = Callable[..., Awaitable[str]]


@pytest.fixture
def register_account(client: AsyncClient) -> RegisterFn:
    async def _register(
        *, name: str, email: str, role: str = 'user', password: str = DEFAULT_PASSWORD
    ) -> dict[str, Any]:
        response = await client.post(
            USER_REGISTER,
            json={'name': name, 'email': email, 'password': password, 'role': role},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login_token(client: AsyncClient) -> LoginFn:
    async def _login(*, email: str, password: str = DEFAULT_PASSWORD) -> str:
        response = await client.post(USER_LOGIN, json={'email': email, 'password': password})
        assert response.status_code == 200, response.text
        return response.json()['token']

    return _login
