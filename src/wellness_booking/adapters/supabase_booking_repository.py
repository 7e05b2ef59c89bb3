"""Supabase-backed booking store and booking read model."""

from dataclasses import dataclass

from supabase import Client

from wellness_booking.adapters.supabase_rows import (
    BOOKING_COLUMNS,
    SESSION_TYPE_COLUMNS,
    TIME_SLOT_COLUMNS,
    is_row_id,
    parse_booking,
    parse_session_type,
    parse_time_slot,
)
from wellness_booking.domain.bookings import Booking, BookingDraft
from wellness_booking.domain.catalog import SessionType, TimeSlot
from wellness_booking.services.bookings import BookingStore
from wellness_booking.services.projection import BookingReadRepository


@dataclass
class SupabaseBookingRepository(BookingStore, BookingReadRepository):
    """Supabase implementation for booking writes and reads.

    The commit runs the ``commit_booking`` Postgres function, which performs
    the conditional counter update and both inserts inside one transaction.
    """

    client: Client

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        """Return the latest committed state of a slot."""
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

    def commit_booking(
        self, draft: BookingDraft, expected_count: int
    ) -> Booking | None:
        """Run the atomic booking function; empty result means a lost race."""
        response = self.client.rpc(
            "commit_booking",
            {
                "p_booking_id": draft.id,
                "p_user_id": draft.user_id,
                "p_time_slot_id": draft.time_slot_id,
                "p_session_type_id": draft.session_type_id,
                "p_session_token": draft.session_token,
                "p_host_id": draft.host_id,
                "p_expected_count": expected_count,
            },
        ).execute()
        if not response.data:
            return None
        return parse_booking(response.data[0])

    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        """Return bookings, newest first, optionally for one user."""
        query = self.client.table("bookings").select(BOOKING_COLUMNS)
        if user_id is not None:
            query = query.eq("user_id", user_id)
        response = query.order("booking_time", desc=True).execute()
        return [parse_booking(row) for row in response.data or []]

    def list_time_slots_by_ids(self, time_slot_ids: list[str]) -> list[TimeSlot]:
        """Return existing slots among the given ids."""
        if not time_slot_ids:
            return []
        response = (
            self.client.table("time_slots")
            .select(TIME_SLOT_COLUMNS)
            .in_("id", time_slot_ids)
            .execute()
        )
        return [parse_time_slot(row) for row in response.data or []]

    def list_session_types_by_ids(
        self, session_type_ids: list[str]
    ) -> list[SessionType]:
        """Return existing session types among the given ids."""
        if not session_type_ids:
            return []
        response = (
            self.client.table("session_types")
            .select(SESSION_TYPE_COLUMNS)
            .in_("id", session_type_ids)
            .execute()
        )
        return [parse_session_type(row) for row in response.data or []]
