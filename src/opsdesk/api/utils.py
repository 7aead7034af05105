"""Shared template setup for page routes."""

import os
from pathlib import Path

from fastapi.templating import Jinja2Templates

from opsdesk.core.database_health import format_bytes
from opsdesk.core.theme import theme_context

TEMPLATES_DIR = Path(
    os.getenv("TEMPLATES_DIR", str(Path(__file__).resolve().parent.parent / "templates"))
)


def format_datetime(value) -> str:
    """Render datetimes as ``YYYY-MM-DD HH:MM UTC``; empty values as a dash."""
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M UTC")


templates = Jinja2Templates(directory=str(TEMPLATES_DIR), context_processors=[theme_context])

# Register custom Jinja2 filters
templates.env.filters["filesize"] = format_bytes
templates.env.filters["datetime"] = format_datetime
