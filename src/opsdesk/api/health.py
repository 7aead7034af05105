"""
Health check endpoint for monitoring and orchestration.

Reports uptime and a self check of the credential hasher. Used by container
health checks and load balancers.
"""

import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from opsdesk.core.logging import get_logger
from opsdesk.core.security import hash_password, verify_password

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

# Known salt/password/digest triple for SHA-256 over hex(salt) + password
GOLDEN_PASSWORD = "correct horse battery staple"
GOLDEN_HASH = (
    "00112233445566778899aabbccddeeff:"
    "fb6a7452acdbed7756de78a1e575dda7cf9b909388a37540ba9bf1aa8dea7210"
)

# Global app start time (set in lifespan)
_app_start_time: datetime | None = None


def set_app_start_time(start_time: datetime) -> None:
    """Called by lifespan to track when app started."""
    global _app_start_time
    _app_start_time = start_time


def get_uptime_seconds() -> int:
    """Calculate seconds since app start."""
    if _app_start_time is None:
        return 0
    return int((datetime.now() - _app_start_time).total_seconds())


def check_credential_hasher() -> dict[str, Any]:
    """
    Verify the golden vector and a fresh hash round trip.

    Returns: {"status": "ok"|"down", "response_time_ms": N, "error": str (if down)}
    """
    start = time.time()
    try:
        golden_ok = verify_password(GOLDEN_PASSWORD, GOLDEN_HASH)
        fresh = hash_password(GOLDEN_PASSWORD)
        round_trip_ok = verify_password(GOLDEN_PASSWORD, fresh) and not verify_password(
            GOLDEN_PASSWORD + "!", fresh
        )
    except Exception as e:
        logger.error("health.credential_hasher_failed", error=type(e).__name__)
        return {
            "status": "down",
            "response_time_ms": int((time.time() - start) * 1000),
            "error": type(e).__name__,
        }

    response_time_ms = int((time.time() - start) * 1000)
    if golden_ok and round_trip_ok:
        return {"status": "ok", "response_time_ms": response_time_ms}

    return {
        "status": "down",
        "response_time_ms": response_time_ms,
        "error": "golden vector mismatch" if not golden_ok else "round trip mismatch",
    }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Service health check",
    description=(
        "Returns service health including uptime and the credential hasher self check. "
        "Returns 200 regardless of degraded checks."
    ),
)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Example response (healthy):
        {
            "status": "ok",
            "uptime_seconds": 3600,
            "checks": {
                "credential_hasher": {"status": "ok", "response_time_ms": 0}
            }
        }
    """
    hasher_check = check_credential_hasher()
    overall_status = "ok" if hasher_check["status"] == "ok" else "degraded"

    return JSONResponse(
        content={
            "status": overall_status,
            "uptime_seconds": get_uptime_seconds(),
            "checks": {"credential_hasher": hasher_check},
        },
        status_code=status.HTTP_200_OK,
    )
