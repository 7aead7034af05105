"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from opsdesk.core.logging import get_logger

logger = get_logger(__name__)

# Never forwarded to Sentry
SENSITIVE_KEYS = ("password", "password_hash", "hashed_password", "secret", "session")

_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN is set and looks like an http(s) DSN, so
    local development and CI run without Sentry. Safe to call repeatedly.
    Returns whether Sentry is active.
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return False

    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be invalid or placeholder, error tracking disabled",
        )
        return False

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),  # structlog already logs
            ],
            before_send=filter_sensitive_data,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Failed to initialize Sentry due to invalid DSN, error tracking disabled",
            error=str(exc),
        )
        return False

    _sentry_initialized = True
    logger.info("sentry.initialized", environment=environment)
    return True


def _scrub(mapping: dict) -> dict:
    return {
        key: "[Filtered]" if any(s in str(key).lower() for s in SENSITIVE_KEYS) else value
        for key, value in mapping.items()
    }


def filter_sensitive_data(event: dict, hint: dict) -> dict:
    """Mask credential-looking keys in request form data, cookies and extra."""
    request = event.get("request")
    if isinstance(request, dict):
        for field in ("data", "cookies"):
            if isinstance(request.get(field), dict):
                request[field] = _scrub(request[field])

    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = _scrub(extra)

    return event
