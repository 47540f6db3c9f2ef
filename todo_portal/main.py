# todo_portal/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from todo_portal.api.api import api_router
from todo_portal.api.deps import verify_csrf
from todo_portal.core.config import settings
from todo_portal.core.errors import LoginRequired, NotFoundError
from todo_portal.core.log import configure_logging
from todo_portal.core.middleware import CsrfCookieMiddleware, RequestLoggingMiddleware
from todo_portal.db.init_db import init_db
from todo_portal.services.session_service import SessionTracker

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse("/auth/login", status_code=status.HTTP_302_FOUND)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message or "Not Found", status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_application() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        # CSRF runs ahead of every route dependency
        dependencies=[Depends(verify_csrf)],
    )

    app.state.session_tracker = SessionTracker.from_settings(settings)

    # ---------- MIDDLEWARE ----------
    # Last added runs first: logging wraps everything
    app.add_middleware(CsrfCookieMiddleware, settings=settings)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # ---------- STATIC FILES ----------
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ---------- ROUTERS ----------
    @app.get("/", include_in_schema=False)
    def index():
        return RedirectResponse("/todos", status_code=status.HTTP_302_FOUND)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    app.include_router(api_router)

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("todo_portal.main:app", host="127.0.0.1", port=8080, reload=settings.debug)
