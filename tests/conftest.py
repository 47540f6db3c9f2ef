# File: tests/conftest.py

import os

# Must be set before todo_portal is imported: settings and the engine are
# built at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from todo_portal.core.config import settings
from todo_portal.db.session import SessionLocal, engine
from todo_portal.main import app
from todo_portal.models.base import Base


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def csrf_token(client):
    """Prime the CSRF cookie with a GET and return its value."""
    client.get("/auth/login")
    token = client.cookies.get(settings.csrf_cookie_name)
    assert token
    return token


@pytest.fixture
def register(client, csrf_token):
    """POST the registration form; keyword overrides for each field."""

    def _register(email="alice@example.com", password="s3cret-pass", confirm=None, token=None):
        return client.post(
            "/auth/register",
            data={
                "email": email,
                "password": password,
                "confirm_password": password if confirm is None else confirm,
                settings.csrf_form_field: csrf_token if token is None else token,
            },
            follow_redirects=False,
        )

    return _register


@pytest.fixture
def logged_in(client, register):
    resp = register()
    assert resp.status_code == 302
    return client
