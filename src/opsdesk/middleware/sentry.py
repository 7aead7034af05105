"""Sentry context middleware to capture request context in error reports."""

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from opsdesk.core.logging import get_request_id


class SentryContextMiddleware:
    """
    Inject request_id and the session user_id into Sentry error reports.

    Must sit inside RequestIDMiddleware and SessionMiddleware.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = get_request_id()
        user_id = (scope.get("session") or {}).get("user_id")

        sentry_sdk.set_tag("request_id", request_id)
        if user_id:
            sentry_sdk.set_user({"id": user_id})

        sentry_sdk.set_context(
            "request",
            {
                "method": scope.get("method"),
                "path": scope.get("path"),
                "request_id": request_id,
            },
        )

        await self.app(scope, receive, send)
