"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booking_manager.api.bookings import router as bookings_router
from booking_manager.api.users import router as users_router
from booking_manager.app_logging import configure_logging
from booking_manager.config import Settings, parse_allowed_origins
from booking_manager.containers import AppContainer
from booking_manager.errors import (
    AuthError,
    NotFound,
    StoreConnectionError,
    StoreError,
)

ContainerFactory = Callable[[], Awaitable[AppContainer]]


def create_app(
    container_factory: ContainerFactory, settings: Settings | None = None
) -> FastAPI:
    """Create a FastAPI app whose container is built at startup."""
    configure_logging()
    logger = logging.getLogger(__name__)
    cors_origins = parse_allowed_origins(
        settings.cors_allow_origins if settings else None
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container = await container_factory()
        except StoreError:
            logger.exception("Failed to initialize the record store")
            raise
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users_router)
    app.include_router(bookings_router)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(StoreConnectionError)
    async def unavailable_handler(
        request: Request, exc: StoreConnectionError
    ) -> JSONResponse:
        logger.error("Record store unavailable: %s", exc)
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(AuthError)
    async def auth_handler(request: Request, exc: AuthError) -> JSONResponse:
        logger.error("Record store rejected credential: %s", exc)
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.warning("Record store error: %s", exc)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
