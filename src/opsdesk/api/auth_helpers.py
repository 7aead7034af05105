"""Role-based authorization helpers."""

from typing import Optional

from fastapi import Depends, HTTPException, status

from opsdesk.api.auth import get_current_user, get_current_user_optional
from opsdesk.core.errors import ForbiddenError
from opsdesk.core.logging import get_logger
from opsdesk.models.user import User, UserRole

logger = get_logger(__name__)


def _redirect(location: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_303_SEE_OTHER,
        detail="Redirect",
        headers={"Location": location},
    )


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency to require ADMIN role (JSON endpoints)."""
    if current_user.role != UserRole.ADMIN:
        logger.warning(
            "auth.permission_denied",
            user_id=current_user.id,
            required_role=UserRole.ADMIN.value,
            user_role=current_user.role.value,
        )
        raise ForbiddenError("You don't have permission to access this resource")
    return current_user


async def require_user_page(
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Page dependency: anonymous visitors are sent to the login form."""
    if current_user is None:
        raise _redirect("/login")
    return current_user


async def require_admin_page(current_user: User = Depends(require_user_page)) -> User:
    """Page dependency: non-admins are sent home, anonymous visitors to login."""
    if current_user.role != UserRole.ADMIN:
        logger.warning(
            "auth.admin_page_redirect",
            user_id=current_user.id,
            user_role=current_user.role.value,
        )
        raise _redirect("/")
    return current_user
