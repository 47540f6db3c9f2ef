# File: todo_portal/schemas/user.py

from typing import ClassVar, Dict, Tuple

from pydantic import BaseModel, ValidationInfo, field_validator, validate_email

from todo_portal.core.config import settings


class LoginForm(BaseModel):
    email: str
    password: str

    REQUIRED_MESSAGES: ClassVar[Dict[str, str]] = {
        "email": "Email is required",
        "password": "Password is required",
        "confirm_password": "Please confirm your password",
    }
    ERROR_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {
        ("email", "value_error"): "Enter a valid email address",
    }

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not v:
            raise ValueError("email is empty")
        _, address = validate_email(v)
        # Bare addresses only: no display name, no surrounding whitespace.
        # Stored exactly as typed; lookups are case-sensitive
        if address.casefold() != v.casefold():
            raise ValueError("not a bare email address")
        return v

    @field_validator("password")
    @classmethod
    def check_password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("password is empty")
        return v


class RegisterForm(LoginForm):
    confirm_password: str

    ERROR_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {
        ("email", "value_error"): "Enter a valid email address",
        ("password", "value_error"): (
            f"Password must be at least {settings.password_min_length} characters"
        ),
        ("confirm_password", "value_error"): "Passwords do not match",
    }

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v) < settings.password_min_length:
            raise ValueError("password too short")
        return v

    @field_validator("confirm_password")
    @classmethod
    def check_passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise ValueError("confirmation is empty")
        password = info.data.get("password")
        if password is not None and v != password:
            raise ValueError("passwords differ")
        return v
