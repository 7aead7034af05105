"""Admin-only database health dashboard."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from starlette.requests import Request

from opsdesk.api.auth_helpers import require_admin, require_admin_page
from opsdesk.api.utils import templates
from opsdesk.core.database_health import build_mock_database_data
from opsdesk.core.logging import get_logger
from opsdesk.models.database_health import DatabaseData
from opsdesk.models.user import User

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_class=HTMLResponse)
async def database_dashboard(
    request: Request,
    current_user: User = Depends(require_admin_page),
):
    """Render database management page with mock health data."""
    data = build_mock_database_data()

    logger.info(
        "admin.database_viewed",
        user_id=current_user.id,
        health_status=data.health.status,
    )

    return templates.TemplateResponse(
        request,
        "admin/database.html",
        {
            "current_user": current_user,
            "data": data,
        },
    )


@router.get("/database", response_model=DatabaseData)
async def database_health(current_user: User = Depends(require_admin)) -> DatabaseData:
    """Mock database health payload (admin-only)."""
    return build_mock_database_data()
