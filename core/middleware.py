# core/middleware.py
"""Session, auth wall and request logging middleware."""
import logging
import time

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

from config.settings import settings
from core.exceptions import UnauthenticatedError
from modules.security.deps import session_user_id

logger = logging.getLogger("rechub.requests")

PUBLIC_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
PUBLIC_PREFIXES = ("/auth/", "/docs/")


def _sess(request: Request):
    return request.session if "session" in request.scope else {}


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response: Response = await call_next(request)
        duration = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Response-Time-Ms"] = str(duration)
        logger.info(
            "%s %s %s %sms",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response


class AuthWallMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, allow_paths=None, allow_prefixes=None):
        super().__init__(app)
        self.allow_paths = set(allow_paths or set())
        self.allow_prefixes = tuple(allow_prefixes or ())

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # public paths
        if path in self.allow_paths or any(path.startswith(p) for p in self.allow_prefixes):
            return await call_next(request)

        if not session_user_id(_sess(request)):
            exc = UnauthenticatedError("LOGIN_REQUIRED")
            return JSONResponse(exc.payload(), status_code=exc.status_code)

        return await call_next(request)


def setup_middleware(app: FastAPI) -> None:
    """Install middleware; the last one added runs first."""
    app.add_middleware(AuthWallMiddleware, allow_paths=PUBLIC_PATHS, allow_prefixes=PUBLIC_PREFIXES)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE,
        same_site="lax",
        https_only=settings.SESSION_HTTPS_ONLY,
        max_age=settings.SESSION_MAX_AGE,
    )
