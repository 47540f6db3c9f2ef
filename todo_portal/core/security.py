# File: todo_portal/core/security.py

"""
Security helpers: password hashing and opaque token generation.

Passwords are hashed with bcrypt. Session and CSRF tokens are random
URL-safe strings with no embedded meaning; the server looks them up.
"""

import secrets
from typing import Optional

import bcrypt

from todo_portal.core.config import settings


TOKEN_BYTES = 32

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode_password(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_password(password), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash
        return False


# Verified against when the email is unknown, so both failure paths
# spend the same time in bcrypt.
DUMMY_PASSWORD_HASH = hash_password(secrets.token_urlsafe(16))


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def tokens_match(expected: Optional[str], provided: Optional[str]) -> bool:
    if not expected or not provided:
        return False
    return secrets.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))
