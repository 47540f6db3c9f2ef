# File: todo_portal/api/routes_auth.py

"""
Login, registration and logout.

Form errors are rendered back into the originating page with status 400
and the submitted email preserved.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from todo_portal.api.deps import get_csrf_token, get_db, get_session_context, get_session_tracker
from todo_portal.api.templating import templates
from todo_portal.core.errors import AppError, FieldErrors
from todo_portal.schemas.user import LoginForm, RegisterForm
from todo_portal.schemas.validation import parse_form
from todo_portal.services import auth_service
from todo_portal.services.session_service import SessionContext, SessionTracker

router = APIRouter()

TODOS_URL = "/todos"
LOGIN_URL = "/auth/login"


def _render_form(
    request: Request,
    template: str,
    csrf_token: str,
    *,
    errors: Optional[FieldErrors] = None,
    email: str = "",
    status_code: int = status.HTTP_200_OK,
):
    return templates.TemplateResponse(
        request,
        template,
        {
            "csrf_token": csrf_token,
            "errors": errors or {},
            "email": email,
        },
        status_code=status_code,
    )


@router.get("/login", summary="Login form")
def login_page(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    csrf_token: str = Depends(get_csrf_token),
):
    if ctx.is_authenticated:
        return RedirectResponse(TODOS_URL, status_code=status.HTTP_302_FOUND)
    return _render_form(request, "auth/login.html", csrf_token)


@router.post("/login", summary="Log in with email and password")
def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    csrf_token: str = Depends(get_csrf_token),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    tracker: SessionTracker = Depends(get_session_tracker),
):
    try:
        form = parse_form(LoginForm, {"email": email, "password": password})
        user = auth_service.authenticate_user(db, email=form.email, password=form.password)
    except AppError as exc:
        return _render_form(
            request,
            "auth/login.html",
            csrf_token,
            errors=exc.field_errors,
            email=email,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    response = RedirectResponse(TODOS_URL, status_code=status.HTTP_302_FOUND)
    tracker.start(db, response, user.id, previous_token=ctx.token)
    return response


@router.get("/register", summary="Registration form")
def register_page(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    csrf_token: str = Depends(get_csrf_token),
):
    if ctx.is_authenticated:
        return RedirectResponse(TODOS_URL, status_code=status.HTTP_302_FOUND)
    return _render_form(request, "auth/register.html", csrf_token)


@router.post("/register", summary="Create an account and log in")
def register(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    csrf_token: str = Depends(get_csrf_token),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    tracker: SessionTracker = Depends(get_session_tracker),
):
    try:
        form = parse_form(
            RegisterForm,
            {"email": email, "password": password, "confirm_password": confirm_password},
        )
        user = auth_service.register_user(db, email=form.email, password=form.password)
    except AppError as exc:
        return _render_form(
            request,
            "auth/register.html",
            csrf_token,
            errors=exc.field_errors,
            email=email,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Auto-login
    response = RedirectResponse(TODOS_URL, status_code=status.HTTP_302_FOUND)
    tracker.start(db, response, user.id, previous_token=ctx.token)
    return response


@router.post("/logout", summary="Destroy the current session")
def logout(
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    tracker: SessionTracker = Depends(get_session_tracker),
):
    response = RedirectResponse(LOGIN_URL, status_code=status.HTTP_302_FOUND)
    tracker.end(db, response, ctx.token)
    return response
