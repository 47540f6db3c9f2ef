# File: todo_portal/core/config.py

import os
from functools import lru_cache

from pydantic import BaseModel, field_validator


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Todo Portal")
    VERSION: str = "0.1.0"
    debug: bool = _env_bool("DEBUG")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./todo_portal.db")

    # Sessions
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session")
    session_lifetime_hours: int = int(os.getenv("SESSION_LIFETIME_HOURS", "24"))

    # CSRF
    csrf_cookie_name: str = os.getenv("CSRF_COOKIE_NAME", "_csrf")
    csrf_form_field: str = os.getenv("CSRF_FORM_FIELD", "csrf_token")

    # Set to true behind HTTPS
    cookie_secure: bool = _env_bool("COOKIE_SECURE")

    # Credentials
    password_min_length: int = int(os.getenv("PASSWORD_MIN_LENGTH", "8"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts cost factors 4..31
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def session_max_age(self) -> int:
        return self.session_lifetime_hours * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
