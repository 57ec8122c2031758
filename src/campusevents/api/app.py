"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from campusevents import __version__
from campusevents.api.dependencies import close_services, init_services
from campusevents.api.models import APIResponse
from campusevents.api.routes import auth, events, registrations, users
from campusevents.auth import NotAuthenticatedError, UnauthorizedError
from campusevents.config import Settings
from campusevents.datastore import (
    DatastoreError,
    DuplicateRegistrationError,
    NotFoundError,
    StorageError,
    UserExistsError,
)
from campusevents.events import InvalidEventError
from campusevents.logging import sanitize_for_log
from campusevents.registrations import CapacityExceededError, InvalidStatusError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into status codes and the response envelope."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(DuplicateRegistrationError)
    async def duplicate_registration_handler(
        _request: Request, exc: DuplicateRegistrationError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(CapacityExceededError)
    async def capacity_exceeded_handler(
        _request: Request, exc: CapacityExceededError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(UserExistsError)
    async def user_exists_handler(_request: Request, exc: UserExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(
        _request: Request, exc: NotAuthenticatedError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(_request: Request, exc: UnauthorizedError) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(InvalidStatusError)
    async def invalid_status_handler(_request: Request, exc: InvalidStatusError) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(InvalidEventError)
    async def invalid_event_handler(_request: Request, exc: InvalidEventError) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", sanitize_for_log(str(exc)))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(DatastoreError)
    async def datastore_error_handler(_request: Request, exc: DatastoreError) -> JSONResponse:
        logger.error("Unhandled datastore error: %s", sanitize_for_log(str(exc)))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    init_services(settings.db_path, bcrypt_rounds=settings.bcrypt_rounds)
    logger.info("Campus Events API started (db=%s)", settings.db_path)

    yield
    # Shutdown
    close_services()
    logger.info("Campus Events API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Read from the environment when omitted.
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title="Campus Events API",
        description="REST API for campus event moderation and registration",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=SESSION_COOKIE,
        max_age=settings.session_max_age,
        same_site="lax",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")

    return app
