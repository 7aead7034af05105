"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from opsdesk.api.auth import get_current_user_optional
from opsdesk.core.accounts import get_account_registry
from opsdesk.main import create_app
from opsdesk.models.user import UserRole
from tests.factories import ADMIN_PASSWORD, USER_PASSWORD, UserFactory, make_registry


@pytest.fixture
def admin_user():
    return UserFactory.build(
        username="Admin",
        password=ADMIN_PASSWORD,
        role=UserRole.ADMIN,
        display_name="Admin User",
    )


@pytest.fixture
def test_user():
    return UserFactory.build(username="viewer", password=USER_PASSWORD, display_name="Test User")


@pytest.fixture
def registry(admin_user, test_user):
    return make_registry(admin_user, test_user)


@pytest.fixture(autouse=True)
def _reset_account_cache():
    get_account_registry.cache_clear()
    yield
    get_account_registry.cache_clear()


@pytest.fixture
def app(registry):
    """App with the account registry overridden."""
    app = create_app()
    app.dependency_overrides[get_account_registry] = lambda: registry
    return app


@pytest_asyncio.fixture
async def unauthenticated_client(app):
    """AsyncClient without authentication overrides (real session login)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def client(app, test_user):
    """Client authenticated as a non-admin user."""

    async def override_get_current_user_optional():
        return test_user

    app.dependency_overrides[get_current_user_optional] = override_get_current_user_optional

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        ac.test_user = test_user
        yield ac


@pytest_asyncio.fixture
async def admin_client(app, admin_user):
    """Client authenticated as an admin."""

    async def override_get_current_user_optional():
        return admin_user

    app.dependency_overrides[get_current_user_optional] = override_get_current_user_optional

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        ac.test_user = admin_user
        yield ac
