"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

import logging

from todo_portal.db.session import engine
from todo_portal.models.base import Base

from todo_portal.models import session, todo, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))
