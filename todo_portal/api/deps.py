# File: todo_portal/api/deps.py

import logging
from collections.abc import Generator
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from todo_portal.core.config import settings
from todo_portal.core.errors import LoginRequired
from todo_portal.core.security import tokens_match
from todo_portal.db.session import SessionLocal
from todo_portal.services.session_service import SessionContext, SessionTracker

logger = logging.getLogger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_tracker(request: Request) -> SessionTracker:
    return request.app.state.session_tracker


def get_session_context(
    request: Request,
    db: Session = Depends(get_db),
    tracker: SessionTracker = Depends(get_session_tracker),
) -> SessionContext:
    return tracker.load(db, request.cookies.get(tracker.cookie_name))


def require_user(ctx: SessionContext = Depends(get_session_context)) -> int:
    """
    Auth gate for protected routes.

    Anonymous requests are redirected to the login page before the
    handler runs.
    """
    if ctx.user_id is None:
        raise LoginRequired()
    return ctx.user_id


def get_csrf_token(request: Request) -> str:
    """Token to embed in rendered forms (set by CsrfCookieMiddleware)."""
    return request.state.csrf_token


async def verify_csrf(request: Request) -> None:
    """
    Reject unsafe requests whose form token does not match the CSRF cookie.

    Installed as an app-wide dependency so it runs before the session is
    loaded and before any handler.
    """
    if request.method in SAFE_METHODS:
        return

    form = await request.form()
    provided: Optional[str] = form.get(settings.csrf_form_field)
    if not provided:
        logger.warning("CSRF token missing: %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="missing csrf token in the form parameter",
        )

    expected = request.cookies.get(settings.csrf_cookie_name)
    if not tokens_match(expected, str(provided)):
        logger.warning("CSRF token mismatch: %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="invalid csrf token",
        )
