"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from friends_united_admin.api.auth import router as auth_router
from friends_united_admin.api.content import router as content_router
from friends_united_admin.api.session import (
    LoginRequired,
    SessionMiddleware,
    login_redirect,
)
from friends_united_admin.api.templating import render
from friends_united_admin.app_logging import configure_logging
from friends_united_admin.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Dashboard starting",
            extra={"environment": container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Friends United Admin", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        SessionMiddleware, secure_cookies=container.settings.session_cookie_secure
    )

    @app.exception_handler(LoginRequired)
    async def login_required(request: Request, exc: LoginRequired) -> Response:
        return login_redirect(exc.next_path)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:  # noqa: PLR2004
            return render(request, "not_found.html", status_code=404)
        return Response(status_code=exc.status_code, headers=exc.headers)

    app.include_router(auth_router)
    app.include_router(content_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
