"""Supabase-backed session type repository."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from wellness_booking.adapters.supabase_rows import (
    SESSION_TYPE_COLUMNS,
    is_row_id,
    parse_session_type,
)
from wellness_booking.domain.catalog import SessionType, SessionTypeInput
from wellness_booking.domain.errors import SessionTypeHasBookingsError
from wellness_booking.services.catalog import SessionTypeRepository

_FOREIGN_KEY_VIOLATION = "23503"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseSessionTypeRepository(SessionTypeRepository):
    """Supabase implementation for session types."""

    client: Client

    def create_session_type(self, data: SessionTypeInput) -> SessionType:
        """Insert a session type row and return it."""
        response = (
            self.client.table("session_types").insert(_payload(data)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session type")
        return parse_session_type(response.data[0])

    def update_session_type(
        self, session_type_id: str, data: SessionTypeInput
    ) -> SessionType | None:
        """Update a session type row; slots are left untouched."""
        if not is_row_id(session_type_id):
            return None
        response = (
            self.client.table("session_types")
            .update(_payload(data))
            .eq("id", session_type_id)
            .execute()
        )
        if not response.data:
            return None
        return parse_session_type(response.data[0])

    def delete_session_type(self, session_type_id: str) -> None:
        """Delete a session type; its unbooked slots cascade with it."""
        try:
            self.client.table("session_types").delete().eq(
                "id", session_type_id
            ).execute()
        except APIError as exc:
            if exc.code == _FOREIGN_KEY_VIOLATION:
                _logger.warning(
                    "Session type %s gained a booking before deletion",
                    session_type_id,
                )
                raise SessionTypeHasBookingsError(session_type_id) from exc
            raise

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        """Return a session type by id, if present."""
        if not is_row_id(session_type_id):
            return None
        response = (
            self.client.table("session_types")
            .select(SESSION_TYPE_COLUMNS)
            .eq("id", session_type_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session_type(response.data[0])

    def list_session_types(self) -> list[SessionType]:
        """Return all session types ordered by creation."""
        response = (
            self.client.table("session_types")
            .select(SESSION_TYPE_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_session_type(row) for row in response.data or []]


def _payload(data: SessionTypeInput) -> dict[str, object]:
    return {
        "name": data.name,
        "description": data.description,
        "session_model": data.session_model.value,
        "max_participants": data.max_participants,
        "price": data.price,
        "currency": data.currency,
        "image_url": data.image_url,
    }
