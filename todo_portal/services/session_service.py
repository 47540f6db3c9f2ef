# File: todo_portal/services/session_service.py

"""
Session tracker.

Maps an opaque cookie token to a user id with a fixed lifetime. Rows live
in the ``sessions`` table, so any process sharing the database can resolve
them. Every mutation also updates the client cookie on the outgoing
response.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from fastapi import Response
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from todo_portal.core.config import Settings
from todo_portal.core.security import generate_token
from todo_portal.models.base import utcnow
from todo_portal.models.session import UserSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """What the current request knows about its session."""

    token: Optional[str] = None
    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class SessionTracker:
    def __init__(
        self,
        *,
        lifetime: timedelta,
        cookie_name: str,
        cookie_secure: bool = False,
    ):
        self.lifetime = lifetime
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionTracker":
        return cls(
            lifetime=timedelta(hours=settings.session_lifetime_hours),
            cookie_name=settings.session_cookie_name,
            cookie_secure=settings.cookie_secure,
        )

    # ---------- store ----------

    def create(self, db: Session, user_id: int) -> str:
        now = utcnow()
        token = generate_token()
        db.add(UserSession(token=token, user_id=user_id, created_at=now, expires_at=now + self.lifetime))
        self.purge_expired(db, now=now)
        db.commit()
        logger.info("Session created for user id=%s", user_id)
        return token

    def resolve(self, db: Session, token: Optional[str]) -> Optional[int]:
        """User id bound to ``token``, or None when missing or expired."""
        if not token:
            return None
        stmt = select(UserSession.user_id).where(
            UserSession.token == token,
            UserSession.expires_at > utcnow(),
        )
        return db.scalars(stmt).first()

    def destroy(self, db: Session, token: Optional[str]) -> None:
        if not token:
            return
        result = db.execute(delete(UserSession).where(UserSession.token == token))
        db.commit()
        if result.rowcount:
            logger.info("Session destroyed")

    def purge_expired(self, db: Session, now=None) -> None:
        db.execute(delete(UserSession).where(UserSession.expires_at <= (now or utcnow())))

    def load(self, db: Session, token: Optional[str]) -> SessionContext:
        return SessionContext(token=token, user_id=self.resolve(db, token))

    # ---------- cookie ----------

    def issue_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=int(self.lifetime.total_seconds()),
            path="/",
            httponly=True,
            samesite="strict",
            secure=self.cookie_secure,
        )

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            self.cookie_name,
            path="/",
            httponly=True,
            samesite="strict",
            secure=self.cookie_secure,
        )

    # ---------- login / logout ----------

    def start(self, db: Session, response: Response, user_id: int, previous_token: Optional[str] = None) -> str:
        """Create a session and set the cookie. Drops ``previous_token`` first."""
        self.destroy(db, previous_token)
        token = self.create(db, user_id)
        self.issue_cookie(response, token)
        return token

    def end(self, db: Session, response: Response, token: Optional[str]) -> None:
        self.destroy(db, token)
        self.clear_cookie(response)
