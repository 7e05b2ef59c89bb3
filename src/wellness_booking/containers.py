"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from wellness_booking.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from wellness_booking.adapters.supabase_session_type_repository import (
    SupabaseSessionTypeRepository,
)
from wellness_booking.adapters.supabase_time_slot_repository import (
    SupabaseTimeSlotRepository,
)
from wellness_booking.config import Settings
from wellness_booking.services.bookings import BookingService
from wellness_booking.services.catalog import CatalogService
from wellness_booking.services.projection import BookingProjectionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    booking_service: BookingService
    projection_service: BookingProjectionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_type_repository = SupabaseSessionTypeRepository(supabase_client)
    time_slot_repository = SupabaseTimeSlotRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    catalog_service = CatalogService(
        session_types=session_type_repository,
        time_slots=time_slot_repository,
        max_series_length=resolved_settings.max_series_length,
    )
    booking_service = BookingService(
        store=booking_repository,
        host_id=resolved_settings.host_user_id,
        max_attempts=resolved_settings.booking_max_attempts,
    )
    projection_service = BookingProjectionService(booking_repository)

    async def close_resources() -> None:
        # The sync Supabase client has no async transports to shut down.
        return None

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        booking_service=booking_service,
        projection_service=projection_service,
        close_resources=close_resources,
    )
