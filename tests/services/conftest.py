"""Service test fixtures — FastAPI test client over the shared in-memory DB.

Invariants:
    - Every test gets a fresh in-memory SQLite database (tests/conftest.py)
    - db_manager swapped for one bound to the test engine: get_db and the readiness
      check run the real DatabaseSessionManager.session() against it
    - register_user returns a token for a freshly registered account

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from devlink.infrastructure.database import DatabaseSessionManager
import devlink.infrastructure.database as db_module
from devlink.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client; requests get sessions from the swapped db_manager."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def auth():
    """Header builder for an authenticated request."""
    return lambda token: {"x-auth-token": token}


@pytest.fixture
def register_user(client):
    """Register an account and return its token."""
    async def _register(
        name: str = "Alice", email: str = "a@x.com", password: str = "secret12",
    ) -> str:
        res = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        return res.json()["token"]

    return _register


@pytest.fixture
async def alice(register_user) -> str:
    return await register_user("Alice", "a@x.com", "password1")


@pytest.fixture
async def bob(register_user) -> str:
    return await register_user("Bob", "b@x.com", "password2")
