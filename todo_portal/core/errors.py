# File: todo_portal/core/errors.py

"""
Application error taxonomy.

Input-shape and business-rule errors (FormValidationError, ConflictError,
AuthenticationError) are recovered by the auth routes and rendered back
into the originating form. NotFoundError and LoginRequired are turned
into responses by the handlers registered in main.py. Anything else is
an infrastructure failure and becomes a 500.
"""

from typing import Dict, List, Optional


FieldErrors = Dict[str, List[str]]

# Key used for errors that belong to the whole form rather than a field
FORM_ERROR_KEY = "_"


class AppError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    @property
    def field_errors(self) -> FieldErrors:
        return {FORM_ERROR_KEY: [self.message]}


class FormValidationError(AppError):
    def __init__(self, errors: FieldErrors):
        super().__init__("Invalid form input")
        self.errors = errors

    @property
    def field_errors(self) -> FieldErrors:
        return self.errors


class ConflictError(AppError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    @property
    def field_errors(self) -> FieldErrors:
        return {self.field or FORM_ERROR_KEY: [self.message]}


class AuthenticationError(AppError):
    """Bad credentials. Never says which half was wrong."""

    def __init__(self):
        super().__init__("Invalid email or password")


class NotFoundError(AppError):
    pass


class LoginRequired(Exception):
    """Raised by the auth gate; handled as a redirect to the login page."""
