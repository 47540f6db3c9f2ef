# File: todo_portal/models/user.py

"""
User model.

Email is the login key and is unique at the storage layer, so two
concurrent registrations for the same address cannot both insert.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from todo_portal.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # bcrypt hash, never the plaintext
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
