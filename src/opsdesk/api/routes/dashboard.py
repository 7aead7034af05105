"""Home page for signed-in users."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from starlette.requests import Request

from opsdesk.api.auth_helpers import require_user_page
from opsdesk.api.utils import templates
from opsdesk.models.user import User

router = APIRouter(tags=["frontend"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, current_user: User = Depends(require_user_page)):
    return templates.TemplateResponse(request, "home.html", {"current_user": current_user})
