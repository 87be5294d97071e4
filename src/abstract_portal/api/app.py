"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from abstract_portal.api.accounts import router as accounts_router
from abstract_portal.api.admin import router as admin_router
from abstract_portal.api.committee import router as committee_router
from abstract_portal.api.dashboard import router as dashboard_router
from abstract_portal.api.guards import LoginRequired
from abstract_portal.api.reviewer import router as reviewer_router
from abstract_portal.app_logging import configure_logging
from abstract_portal.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Runs to completion before the server accepts requests.
        created = app.state.container.initialize()
        logger.info(
            "Startup complete (admin account %s)",
            "created" if created else "already present",
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(accounts_router)
    app.include_router(dashboard_router)
    app.include_router(reviewer_router)
    app.include_router(committee_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(LoginRequired)
    async def login_required(_request: Request, _exc: LoginRequired) -> Response:
        return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> Response:
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> Response:
        logger.error(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return PlainTextResponse(
            "Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return app
