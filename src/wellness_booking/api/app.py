"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wellness_booking.api.admin import router as admin_router
from wellness_booking.api.bookings import router as bookings_router
from wellness_booking.api.errors import domain_error_handler
from wellness_booking.app_logging import configure_logging
from wellness_booking.containers import AppContainer
from wellness_booking.domain.errors import DomainError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(bookings_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
