# File: todo_portal/services/auth_service.py

"""
Credential store operations.

  - register_user: create an account from a validated registration form
  - authenticate_user: look up by email and verify the password hash
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_portal.core.errors import AuthenticationError, ConflictError
from todo_portal.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from todo_portal.models.user import User

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "This email address is already registered"


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email)).first()


def register_user(db: Session, *, email: str, password: str) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Raises ConflictError if the email is taken, either by an existing row
    or by a concurrent registration that won the insert.
    """
    if get_user_by_email(db, email) is not None:
        raise ConflictError(EMAIL_TAKEN_MESSAGE, field="email")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(EMAIL_TAKEN_MESSAGE, field="email") from exc
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> User:
    """
    Return the user whose email and password match.

    Unknown email and wrong password raise the same AuthenticationError.
    """
    user = get_user_by_email(db, email)
    if user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Failed login attempt")
        raise AuthenticationError()

    if not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthenticationError()

    return user
