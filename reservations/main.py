"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reservations.api.v1.router import api_router
from reservations.config import settings
from reservations.core.authorization import AuthorizationGuard
from reservations.core.exceptions import AppException
from reservations.core.middleware import RequestLoggingMiddleware
from reservations.services.booking_service import BookingService
from reservations.services.booking_store import InMemoryBookingStore
from reservations.services.listing_titles import CatalogTitleResolver, ListingTitleResolver
from reservations.utils.booking_number import BookingNumberGenerator

logger = logging.getLogger(__name__)


def build_booking_service(title_resolver: ListingTitleResolver | None = None) -> BookingService:
    """Build the booking service on the configured store."""
    if settings.booking_store == "sql":
        from reservations.database import async_session_factory
        from reservations.services.sql_booking_store import SqlBookingStore

        store = SqlBookingStore(async_session_factory)
    else:
        store = InMemoryBookingStore()

    return BookingService(
        store,
        title_resolver=title_resolver or CatalogTitleResolver(),
        numbers=BookingNumberGenerator(
            prefix=settings.booking_number_prefix,
            seed=settings.booking_number_seed,
        ),
        title_lookup_timeout=settings.title_lookup_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    # Startup
    if settings.booking_store == "sql":
        from reservations.database import close_db, init_db

        if settings.debug:
            await init_db()

    logger.info(f"{settings.app_name} started (booking store: {settings.booking_store})")

    yield

    # Shutdown
    if settings.booking_store == "sql":
        await close_db()


def create_application(booking_service: BookingService | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Reservation Service - bookings for homestays and guides",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.booking_service = booking_service or build_booking_service()
    app.state.guard = AuthorizationGuard(
        ownership_timeout=settings.ownership_check_timeout_seconds,
    )

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, **exc.extra},
            headers=exc.headers,
        )

    # Request logging sits inside CORS
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "booking_store": settings.booking_store,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reservations.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
