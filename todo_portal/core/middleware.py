# File: todo_portal/core/middleware.py

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_portal.core.config import Settings
from todo_portal.core.security import generate_token

logger = logging.getLogger("todo_portal.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with its status and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "REQUEST ERROR: method=%s uri=%s err=%r",
                request.method,
                request.url.path,
                exc,
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "REQUEST: method=%s uri=%s status=%s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


class CsrfCookieMiddleware(BaseHTTPMiddleware):
    """
    Make sure every client holds a CSRF cookie.

    The token is exposed as ``request.state.csrf_token`` for templates.
    Validation happens in the ``verify_csrf`` dependency.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.cookie_name = settings.csrf_cookie_name
        self.cookie_secure = settings.cookie_secure
        self.max_age = settings.session_max_age

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = request.cookies.get(self.cookie_name)
        issued = not token
        if issued:
            token = generate_token()
        request.state.csrf_token = token

        response = await call_next(request)

        if issued:
            response.set_cookie(
                self.cookie_name,
                token,
                max_age=self.max_age,
                path="/",
                httponly=True,
                samesite="strict",
                secure=self.cookie_secure,
            )
        return response
