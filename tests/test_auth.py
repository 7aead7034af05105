"""Tests for authentication endpoints and session handling."""

from datetime import timedelta

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from starlette.requests import Request

from opsdesk.api.auth import ROLE_TIMEOUTS, _enforce_inactivity_timeout
from opsdesk.utils.datetime import now_utc
from tests.factories import ADMIN_PASSWORD, USER_PASSWORD


def _request_with_session(session: dict, headers: list | None = None) -> Request:
    return Request({"type": "http", "session": session, "headers": headers or []})


class TestLogin:
    """Login form and session creation."""

    @pytest.mark.asyncio
    async def test_login_page_renders(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.get("/login")

        assert response.status_code == 200
        assert 'action="/login"' in response.text

    @pytest.mark.asyncio
    async def test_login_page_shows_error(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.get("/login?error=1")

        assert "Invalid username or password" in response.text

    @pytest.mark.asyncio
    async def test_admin_login_redirects_to_admin(
        self, unauthenticated_client: AsyncClient
    ) -> None:
        response = await unauthenticated_client.post(
            "/login", data={"username": "admin", "password": ADMIN_PASSWORD}
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/admin"

        dashboard = await unauthenticated_client.get("/admin")
        assert dashboard.status_code == 200
        assert "Database Management" in dashboard.text

    @pytest.mark.asyncio
    async def test_user_login_redirects_home(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.post(
            "/login", data={"username": "viewer", "password": USER_PASSWORD}
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/"

        home = await unauthenticated_client.get("/")
        assert home.status_code == 200
        assert "Welcome, Test User" in home.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,password",
        [("admin", "wrongpass"), ("nobody", ADMIN_PASSWORD), ("viewer", USER_PASSWORD.upper())],
    )
    async def test_failed_login_redirects_with_error(
        self, unauthenticated_client: AsyncClient, username: str, password: str
    ) -> None:
        response = await unauthenticated_client.post(
            "/login", data={"username": username, "password": password}
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/login?error=1"

        follow_up = await unauthenticated_client.get("/admin")
        assert follow_up.status_code == 303
        assert follow_up.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, unauthenticated_client: AsyncClient) -> None:
        await unauthenticated_client.post(
            "/login", data={"username": "admin", "password": ADMIN_PASSWORD}
        )

        response = await unauthenticated_client.post("/logout")
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

        after = await unauthenticated_client.get("/admin")
        assert after.status_code == 303
        assert after.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_logout_get(self, unauthenticated_client: AsyncClient) -> None:
        response = await unauthenticated_client.get("/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"


class TestInactivityTimeout:
    """Role-based session expiry."""

    def test_recent_activity_is_refreshed(self) -> None:
        last = (now_utc() - timedelta(minutes=5)).isoformat()
        session = {"user_id": "viewer", "user_role": "user", "last_activity": last}

        _enforce_inactivity_timeout(_request_with_session(session))

        assert session["user_id"] == "viewer"
        assert session["last_activity"] > last

    def test_expired_session_redirects_to_login(self) -> None:
        expired = now_utc() - timedelta(seconds=ROLE_TIMEOUTS["user"] + 60)
        session = {
            "user_id": "viewer",
            "user_role": "user",
            "last_activity": expired.isoformat(),
        }

        with pytest.raises(HTTPException) as exc_info:
            _enforce_inactivity_timeout(_request_with_session(session))

        assert exc_info.value.status_code == 303
        assert exc_info.value.headers["Location"] == "/login?expired=1"
        assert session == {}

    def test_admin_has_longer_timeout(self) -> None:
        last = now_utc() - timedelta(hours=1)
        session = {"user_id": "admin", "user_role": "admin", "last_activity": last.isoformat()}

        _enforce_inactivity_timeout(_request_with_session(session))

        assert session["user_id"] == "admin"

    def test_expired_htmx_request_gets_hx_redirect(self) -> None:
        expired = now_utc() - timedelta(hours=3)
        session = {"user_id": "admin", "user_role": "admin", "last_activity": expired.isoformat()}
        request = _request_with_session(session, headers=[(b"hx-request", b"true")])

        with pytest.raises(HTTPException) as exc_info:
            _enforce_inactivity_timeout(request)

        assert exc_info.value.status_code == 200
        assert exc_info.value.headers["HX-Redirect"] == "/login?expired=1"

    def test_garbage_timestamp_is_treated_as_fresh(self) -> None:
        session = {"user_id": "viewer", "user_role": "user", "last_activity": "yesterday"}

        _enforce_inactivity_timeout(_request_with_session(session))

        assert session["user_id"] == "viewer"
        assert session["last_activity"] != "yesterday"
