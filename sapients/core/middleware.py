"""CORS, request-id, logging and session-presence middleware."""

import uuid
import time
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sapients.core.config import settings

logger = logging.getLogger("sapients")

PUBLIC_PATHS = ("/login", "/api/auth/login")
PASSTHROUGH_PREFIXES = ("/api/", "/docs", "/redoc", "/openapi.json", "/static/")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Add a unique request ID to every request/response."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        response: Response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Request-Id"] = request_id
        response.headers["X-Response-Time-Ms"] = str(duration)

        logger.info(
            "%s %s %s %sms",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response


def is_passthrough(path: str) -> bool:
    """Paths the presence check never redirects."""
    if any(path.startswith(p) for p in PUBLIC_PATHS):
        return True
    return any(path.startswith(p) for p in PASSTHROUGH_PREFIXES)


class SessionPresenceMiddleware(BaseHTTPMiddleware):
    """Redirect page requests that carry no session cookie to the login page.

    UX-only routing, NOT a security boundary: it checks that the cookie is
    present, never that it is valid, so expired or forged tokens pass. Every
    page and API handler must still resolve the session and check
    permissions itself through `sapients.core.guards`. API paths are never
    filtered here.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if is_passthrough(path):
            return await call_next(request)

        if not request.cookies.get(settings.SESSION_COOKIE_NAME):
            return RedirectResponse(url=settings.LOGIN_PATH, status_code=307)

        return await call_next(request)


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Cookie presence pre-filter for page routes
    app.add_middleware(SessionPresenceMiddleware)

    # Request ID + timing (outermost)
    app.add_middleware(RequestIdMiddleware)
