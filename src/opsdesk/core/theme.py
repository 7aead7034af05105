"""Theme provider: resolves the colour theme shared by every rendered page."""

from typing import Any, Literal, get_args

from starlette.requests import Request

Theme = Literal["light", "dark", "system"]

THEMES: tuple[str, ...] = get_args(Theme)
DEFAULT_THEME: Theme = "system"
THEME_COOKIE = "theme"
THEME_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def is_valid_theme(value: Any) -> bool:
    return isinstance(value, str) and value in THEMES


def resolve_theme(request: Request) -> str:
    """Session theme, then the theme cookie, then the default."""
    session = request.scope.get("session") or {}
    for candidate in (session.get("theme"), request.cookies.get(THEME_COOKIE)):
        if is_valid_theme(candidate):
            return candidate
    return DEFAULT_THEME


def theme_context(request: Request) -> dict[str, Any]:
    """Jinja2 context processor injecting ``theme`` and the choices."""
    return {"theme": resolve_theme(request), "themes": THEMES}
