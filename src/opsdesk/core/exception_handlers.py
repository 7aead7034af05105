"""Global exception handlers for FastAPI."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from opsdesk.core.errors import AppError
from opsdesk.core.logging import get_logger

logger = get_logger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle all AppError exceptions and convert to JSON response.

    Returns standardized error format:
    {
        "code": "FORBIDDEN",
        "message": "You don't have permission to access this resource"
    }
    """
    if exc.status_code >= 500:
        logger.error("app_error", code=exc.code, message=exc.message, path=request.url.path)

    error_response = exc.to_response()
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(exclude_none=True),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with redirect support for auth gates."""
    headers = getattr(exc, "headers", None) or {}

    # Page redirects (login required, admin only, session expired)
    if exc.status_code == status.HTTP_303_SEE_OTHER and "Location" in headers:
        return RedirectResponse(url=headers["Location"], status_code=303)

    # HTMX redirects (session expiration for HTMX requests)
    if exc.status_code == status.HTTP_200_OK and "HX-Redirect" in headers:
        return Response(status_code=200, headers={"HX-Redirect": headers["HX-Redirect"]})

    # Default: log and return JSON
    logger.error(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers or None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers with FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
