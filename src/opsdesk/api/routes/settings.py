"""User settings endpoints."""

from urllib.parse import urlsplit

from fastapi import APIRouter, Form
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from opsdesk.core.errors import ValidationError
from opsdesk.core.logging import get_logger
from opsdesk.core.theme import THEME_COOKIE, THEME_COOKIE_MAX_AGE, THEMES, is_valid_theme

logger = get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _same_site_path(referer: str | None, host: str | None) -> str:
    """Path of the referring page, or / when absent or off-site."""
    if not referer:
        return "/"
    parts = urlsplit(referer)
    if parts.netloc and parts.netloc != host:
        return "/"
    path = parts.path or "/"
    if not path.startswith("/") or path.startswith("//"):
        return "/"
    return f"{path}?{parts.query}" if parts.query else path


@router.post("/theme")
async def update_theme(request: Request, theme: str = Form(...)):
    """Store the chosen theme in the session and a long-lived cookie."""
    if not is_valid_theme(theme):
        raise ValidationError(
            f"Unknown theme: {theme}",
            details={"allowed": list(THEMES)},
        )

    request.session["theme"] = theme
    logger.info("theme.updated", user_id=request.session.get("user_id"), theme=theme)

    response = RedirectResponse(
        url=_same_site_path(request.headers.get("referer"), request.headers.get("host")),
        status_code=303,
    )
    response.set_cookie(
        THEME_COOKIE,
        theme,
        max_age=THEME_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return response
