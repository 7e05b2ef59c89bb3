"""Read-side views joining bookings with their slots and session types."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from wellness_booking.domain.bookings import Booking, MergedBooking
from wellness_booking.domain.catalog import SessionType, TimeSlot


class BookingReadRepository(Protocol):
    """Read-only access to bookings and the records they reference."""

    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        """Return bookings, optionally limited to one user."""

    def list_time_slots_by_ids(self, time_slot_ids: list[str]) -> list[TimeSlot]:
        """Return the slots with the given ids that still exist."""

    def list_session_types_by_ids(
        self, session_type_ids: list[str]
    ) -> list[SessionType]:
        """Return the session types with the given ids that still exist."""


@dataclass(frozen=True)
class UserBookings:
    """A user's bookings split around the current instant."""

    upcoming: list[MergedBooking]
    past: list[MergedBooking]


def merge_bookings(
    bookings: list[Booking],
    time_slots: list[TimeSlot],
    session_types: list[SessionType],
) -> list[MergedBooking]:
    """Join bookings with slots and types, skipping orphaned bookings."""
    slots_by_id = {slot.id: slot for slot in time_slots}
    types_by_id = {session_type.id: session_type for session_type in session_types}
    merged = []
    for booking in bookings:
        time_slot = slots_by_id.get(booking.time_slot_id)
        session_type = types_by_id.get(booking.session_type_id)
        if time_slot is None or session_type is None:
            continue
        merged.append(
            MergedBooking(
                booking=booking, time_slot=time_slot, session_type=session_type
            )
        )
    return merged


def _by_start(merged: MergedBooking) -> datetime:
    return merged.time_slot.start_time


@dataclass
class BookingProjectionService:
    """Builds booking lists for users and administrators."""

    repository: BookingReadRepository

    def list_user_bookings(self, user_id: str, now: datetime) -> UserBookings:
        """Return a user's bookings, latest first, split into upcoming and past."""
        merged = sorted(
            self._merged(self.repository.list_bookings(user_id)),
            key=_by_start,
            reverse=True,
        )
        return UserBookings(
            upcoming=[item for item in merged if item.time_slot.end_time > now],
            past=[item for item in merged if item.time_slot.end_time <= now],
        )

    def list_todays_bookings(
        self, now: datetime, timezone_name: str
    ) -> list[MergedBooking]:
        """Return bookings starting today, finished or not, earliest first."""
        tz = ZoneInfo(timezone_name)
        today = now.astimezone(tz).date()
        merged = self._merged(self.repository.list_bookings())
        todays = [
            item
            for item in merged
            if item.time_slot.start_time.astimezone(tz).date() == today
        ]
        return sorted(todays, key=_by_start)

    def list_past_bookings(
        self, now: datetime, timezone_name: str
    ) -> list[MergedBooking]:
        """Return ended bookings that did not start today, latest first."""
        tz = ZoneInfo(timezone_name)
        today = now.astimezone(tz).date()
        merged = self._merged(self.repository.list_bookings())
        past = [
            item
            for item in merged
            if item.time_slot.end_time <= now
            and item.time_slot.start_time.astimezone(tz).date() != today
        ]
        return sorted(past, key=_by_start, reverse=True)

    def _merged(self, bookings: list[Booking]) -> list[MergedBooking]:
        if not bookings:
            return []
        time_slots = self.repository.list_time_slots_by_ids(
            sorted({booking.time_slot_id for booking in bookings})
        )
        session_types = self.repository.list_session_types_by_ids(
            sorted({booking.session_type_id for booking in bookings})
        )
        return merge_bookings(bookings, time_slots, session_types)
