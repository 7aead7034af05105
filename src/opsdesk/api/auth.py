"""Authentication endpoints and dependencies."""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.requests import Request

from opsdesk.api.utils import templates
from opsdesk.core.accounts import AccountRegistry, get_account_registry
from opsdesk.core.errors import UnauthorizedError
from opsdesk.core.logging import get_logger
from opsdesk.models.user import User, UserRole
from opsdesk.utils.datetime import now_utc, parse_iso_utc

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


# Configurable inactivity timeout by role (seconds)
ROLE_TIMEOUTS = {
    UserRole.USER.value: 30 * 60,  # 30 minutes
    UserRole.ADMIN.value: 2 * 60 * 60,  # 2 hours
}


def _enforce_inactivity_timeout(request: Request) -> None:
    """Expire the session after role-specific inactivity, else touch it."""
    timeout = ROLE_TIMEOUTS.get(request.session.get("user_role"))
    if timeout is None:
        return

    now = now_utc()
    last_activity = parse_iso_utc(request.session.get("last_activity"))

    if last_activity and (now - last_activity) > timedelta(seconds=timeout):
        user_id = request.session.get("user_id")
        user_role = request.session.get("user_role")
        request.session.clear()

        logger.info(
            "auth.session_expired",
            user_id=user_id,
            role=user_role,
            timeout_seconds=timeout,
            time_elapsed_seconds=round((now - last_activity).total_seconds(), 2),
        )

        if request.headers.get("HX-Request") == "true":
            raise HTTPException(
                status_code=status.HTTP_200_OK,
                detail="Session expired",
                headers={"HX-Redirect": "/login?expired=1"},
            )
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Session expired",
            headers={"Location": "/login?expired=1"},
        )

    request.session["last_activity"] = now.isoformat()


async def get_current_user_optional(
    request: Request,
    registry: AccountRegistry = Depends(get_account_registry),
) -> Optional[User]:
    """Current user from the session, or None when not logged in."""
    user_id = request.session.get("user_id")
    if not user_id:
        return None

    _enforce_inactivity_timeout(request)

    user = registry.get_by_id(user_id)
    if user is None:
        logger.warning("auth.unknown_session_user", user_id=user_id)
        request.session.clear()
    return user


async def get_current_user(
    user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Dependency to get current authenticated user from session."""
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    """Render login form."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "error": request.query_params.get("error"),
            "expired": request.query_params.get("expired"),
        },
    )


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    registry: AccountRegistry = Depends(get_account_registry),
):
    """Login endpoint - validates credentials and creates session."""
    user = registry.authenticate(username, password)

    if user is None:
        logger.warning("auth.login_failed", username=username)
        return RedirectResponse(url="/login?error=1", status_code=302)

    theme = request.session.get("theme")
    request.session.clear()
    if theme:
        request.session["theme"] = theme

    request.session["user_id"] = user.id
    request.session["user_role"] = user.role.value
    request.session["user_display_name"] = user.name
    request.session["last_activity"] = now_utc().isoformat()

    logger.info("auth.login_success", user_id=user.id, role=user.role.value)
    return RedirectResponse(url="/admin" if user.is_admin else "/", status_code=302)


@router.post("/logout")
async def logout(request: Request):
    """Logout endpoint - clears session."""
    user_id = request.session.get("user_id")
    if user_id:
        logger.info("auth.logout", user_id=user_id)

    request.session.clear()
    return RedirectResponse(url="/login", status_code=302)


@router.get("/logout")
async def logout_get(request: Request):
    """Logout GET endpoint for browser compatibility."""
    return await logout(request)
