# File: tests/test_auth.py

from sqlalchemy import func, select

from todo_portal.core.config import settings
from todo_portal.models.session import UserSession
from todo_portal.models.user import User


def login(client, csrf_token, email, password):
    return client.post(
        "/auth/login",
        data={"email": email, "password": password, settings.csrf_form_field: csrf_token},
        follow_redirects=False,
    )


def test_root_redirects_to_todos(client):
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/todos"


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_login_page_sets_csrf_cookie(client):
    resp = client.get("/auth/login")
    assert resp.status_code == 200
    token = client.cookies.get(settings.csrf_cookie_name)
    assert token
    assert token in resp.text


def test_register_creates_user_and_session(client, csrf_token, register, db):
    resp = register()

    assert resp.status_code == 302
    assert resp.headers["location"] == "/todos"
    cookie = resp.headers["set-cookie"].lower()
    assert f"{settings.session_cookie_name}=" in cookie
    assert "httponly" in cookie
    assert "samesite=strict" in cookie

    user = db.scalars(select(User)).one()
    assert user.email == "alice@example.com"
    assert user.password_hash != "s3cret-pass"
    assert db.scalar(select(func.count()).select_from(UserSession)) == 1

    # Session is live: the list renders instead of redirecting
    assert client.get("/todos", follow_redirects=False).status_code == 200


def test_register_duplicate_email_is_rejected(client, csrf_token, register, db):
    assert register().status_code == 302
    client.post("/auth/logout", data={settings.csrf_form_field: csrf_token})

    resp = register()

    assert resp.status_code == 400
    assert "already registered" in resp.text
    assert db.scalar(select(func.count()).select_from(User)) == 1


def test_register_validation_errors(client, csrf_token, register, db):
    resp = register(email="not-an-email", password="short")
    assert resp.status_code == 400
    assert "Enter a valid email address" in resp.text
    assert f"at least {settings.password_min_length} characters" in resp.text
    assert db.scalar(select(func.count()).select_from(User)) == 0


def test_register_password_mismatch(client, csrf_token, register):
    resp = register(confirm="something-else")
    assert resp.status_code == 400
    assert "Passwords do not match" in resp.text
    # Submitted email is preserved
    assert 'value="alice@example.com"' in resp.text


def test_register_missing_fields(client, csrf_token, register):
    resp = register(email="", password="", confirm="")
    assert resp.status_code == 400
    assert "Email is required" in resp.text
    assert "Password is required" in resp.text
    assert "Please confirm your password" in resp.text


def test_login_success(client, csrf_token, register):
    register()
    client.post("/auth/logout", data={settings.csrf_form_field: csrf_token})

    resp = login(client, csrf_token, "alice@example.com", "s3cret-pass")

    assert resp.status_code == 302
    assert resp.headers["location"] == "/todos"
    assert client.get("/todos", follow_redirects=False).status_code == 200


def test_login_failures_are_indistinguishable(client, csrf_token, register):
    register()
    client.post("/auth/logout", data={settings.csrf_form_field: csrf_token})

    unknown = login(client, csrf_token, "nobody@example.com", "s3cret-pass")
    wrong = login(client, csrf_token, "alice@example.com", "wrong-password")

    assert unknown.status_code == wrong.status_code == 400
    assert "Invalid email or password" in unknown.text
    assert "Invalid email or password" in wrong.text
    assert settings.session_cookie_name not in unknown.cookies
    assert settings.session_cookie_name not in wrong.cookies


def test_login_and_register_pages_redirect_when_authenticated(logged_in):
    for path in ("/auth/login", "/auth/register"):
        resp = logged_in.get(path, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/todos"


def test_logout_destroys_session(logged_in, db):
    token = logged_in.cookies.get(settings.csrf_cookie_name)

    resp = logged_in.post(
        "/auth/logout",
        data={settings.csrf_form_field: token},
        follow_redirects=False,
    )

    assert resp.status_code == 302
    assert resp.headers["location"] == "/auth/login"
    assert db.scalar(select(func.count()).select_from(UserSession)) == 0
    assert logged_in.get("/todos", follow_redirects=False).headers["location"] == "/auth/login"


def test_post_without_csrf_token_is_rejected(client, csrf_token, db):
    resp = client.post(
        "/auth/register",
        data={"email": "alice@example.com", "password": "s3cret-pass", "confirm_password": "s3cret-pass"},
        follow_redirects=False,
    )
    assert resp.status_code == 400
    assert db.scalar(select(func.count()).select_from(User)) == 0


def test_post_with_wrong_csrf_token_is_rejected(client, csrf_token, register, db):
    resp = register(token="forged-token")
    assert resp.status_code == 403
    assert db.scalar(select(func.count()).select_from(User)) == 0


def test_register_rejects_display_name_email(client, csrf_token, register, db):
    resp = register(email="Alice <alice@example.com>")

    assert resp.status_code == 400
    assert "Enter a valid email address" in resp.text
    assert db.scalar(select(func.count()).select_from(User)) == 0


def test_register_rejects_padded_email(client, csrf_token, register, db):
    resp = register(email=" alice@example.com ")

    assert resp.status_code == 400
    assert "Enter a valid email address" in resp.text
    assert db.scalar(select(func.count()).select_from(User)) == 0


def test_login_replaces_existing_session(logged_in, db):
    old = db.scalars(select(UserSession.token)).one()

    token = logged_in.cookies.get(settings.csrf_cookie_name)
    resp = login(logged_in, token, "alice@example.com", "s3cret-pass")

    assert resp.status_code == 302
    tokens = db.scalars(select(UserSession.token)).all()
    assert len(tokens) == 1
    assert tokens[0] != old
