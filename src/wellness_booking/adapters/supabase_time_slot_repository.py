"""Supabase-backed time slot repository."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from wellness_booking.adapters.supabase_rows import (
    TIME_SLOT_COLUMNS,
    is_row_id,
    parse_time_slot,
)
from wellness_booking.domain.catalog import NewTimeSlot, TimeSlot
from wellness_booking.domain.errors import SlotHasBookingsError
from wellness_booking.services.catalog import TimeSlotRepository

_FOREIGN_KEY_VIOLATION = "23503"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseTimeSlotRepository(TimeSlotRepository):
    """Supabase implementation for time slots."""

    client: Client

    def create_time_slots(self, slots: list[NewTimeSlot]) -> list[TimeSlot]:
        """Insert every slot with a single statement."""
        if not slots:
            return []
        payload = [
            {
                "session_type_id": slot.session_type_id,
                "start_time": slot.start_time.isoformat(),
                "end_time": slot.end_time.isoformat(),
                "booked_participants_count": 0,
            }
            for slot in slots
        ]
        response = self.client.table("time_slots").insert(payload).execute()
        if not response.data or len(response.data) != len(slots):
            raise RuntimeError("Failed to create time slots")
        return [parse_time_slot(row) for row in response.data]

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        """Return a time slot by id, if present."""
        if not is_row_id(time_slot_id):
            return None
        response = (
            self.client.table("time_slots")
            .select(TIME_SLOT_COLUMNS)
            .eq("id", time_slot_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_time_slot(response.data[0])

    def list_time_slots(self, session_type_id: str) -> list[TimeSlot]:
        """Return the slots of a session type ordered by start."""
        if not is_row_id(session_type_id):
            return []
        response = (
            self.client.table("time_slots")
            .select(TIME_SLOT_COLUMNS)
            .eq("session_type_id", session_type_id)
            .order("start_time", desc=False)
            .execute()
        )
        return [parse_time_slot(row) for row in response.data or []]

    def count_slot_bookings(self, time_slot_id: str) -> int:
        """Return how many bookings reference a slot."""
        response = (
            self.client.table("bookings")
            .select("id", count="exact")
            .eq("time_slot_id", time_slot_id)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def count_session_type_bookings(self, session_type_id: str) -> int:
        """Return how many bookings reference a session type."""
        response = (
            self.client.table("bookings")
            .select("id", count="exact")
            .eq("session_type_id", session_type_id)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def delete_time_slot(self, time_slot_id: str) -> None:
        """Delete a slot; the bookings foreign key blocks booked slots."""
        try:
            self.client.table("time_slots").delete().eq("id", time_slot_id).execute()
        except APIError as exc:
            if exc.code == _FOREIGN_KEY_VIOLATION:
                _logger.warning("Slot %s gained a booking before deletion", time_slot_id)
                raise SlotHasBookingsError(time_slot_id) from exc
            raise
