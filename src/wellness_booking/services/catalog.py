"""Session type and time slot catalog management."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol

from wellness_booking.domain.catalog import (
    NewTimeSlot,
    SessionModel,
    SessionType,
    SessionTypeInput,
    TimeSlot,
)
from wellness_booking.domain.errors import (
    NotFoundError,
    SessionTypeHasBookingsError,
    SlotHasBookingsError,
    ValidationError,
)
from wellness_booking.domain.recurrence import Recurrence, expand_occurrences

MIN_CURRENCY_LENGTH = 2

_logger = logging.getLogger(__name__)


class SessionTypeRepository(Protocol):
    """Persistence interface for session types."""

    def create_session_type(self, data: SessionTypeInput) -> SessionType:
        """Create a session type and return it."""

    def update_session_type(
        self, session_type_id: str, data: SessionTypeInput
    ) -> SessionType | None:
        """Update a session type, returning None when it does not exist."""

    def delete_session_type(self, session_type_id: str) -> None:
        """Delete a session type."""

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        """Return a session type by id, if present."""

    def list_session_types(self) -> list[SessionType]:
        """Return all session types."""


class TimeSlotRepository(Protocol):
    """Persistence interface for time slots."""

    def create_time_slots(self, slots: list[NewTimeSlot]) -> list[TimeSlot]:
        """Insert all slots in one all-or-nothing batch."""

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        """Return a time slot by id, if present."""

    def list_time_slots(self, session_type_id: str) -> list[TimeSlot]:
        """Return the slots of a session type."""

    def count_slot_bookings(self, time_slot_id: str) -> int:
        """Return how many bookings reference a slot."""

    def count_session_type_bookings(self, session_type_id: str) -> int:
        """Return how many bookings reference a session type."""

    def delete_time_slot(self, time_slot_id: str) -> None:
        """Delete a time slot."""


def validate_session_type(data: SessionTypeInput) -> SessionTypeInput:
    """Check session type fields and return them normalized."""
    if not any(value.strip() for value in data.name.values()):
        raise ValidationError("A session type needs a name.")
    if data.max_participants < 1:
        raise ValidationError("A session needs at least 1 participant.")
    if data.session_model == SessionModel.PRIVATE and data.max_participants != 1:
        raise ValidationError("Private sessions must have exactly 1 participant.")
    if data.price < 0:
        raise ValidationError("Price must be non-negative.")
    currency = data.currency.strip().lower()
    if len(currency) < MIN_CURRENCY_LENGTH:
        raise ValidationError("Currency is required.")
    return replace(data, currency=currency)


@dataclass
class CatalogService:
    """Administrator operations on session types and their slots."""

    session_types: SessionTypeRepository
    time_slots: TimeSlotRepository
    max_series_length: int = 104

    def create_session_type(self, data: SessionTypeInput) -> SessionType:
        """Validate and persist a new session type."""
        return self.session_types.create_session_type(validate_session_type(data))

    def update_session_type(
        self, session_type_id: str, data: SessionTypeInput
    ) -> SessionType:
        """Validate and apply edits; existing slots keep their counters."""
        updated = self.session_types.update_session_type(
            session_type_id, validate_session_type(data)
        )
        if updated is None:
            raise NotFoundError("session_type", session_type_id)
        return updated

    def delete_session_type(self, session_type_id: str) -> None:
        """Delete a session type and its slots unless any slot is booked."""
        if self.session_types.get_session_type(session_type_id) is None:
            raise NotFoundError("session_type", session_type_id)
        if self.time_slots.count_session_type_bookings(session_type_id) > 0:
            _logger.warning(
                "Refused to delete booked session type: id=%s", session_type_id
            )
            raise SessionTypeHasBookingsError(session_type_id)
        self.session_types.delete_session_type(session_type_id)
        _logger.info("Deleted session type: id=%s", session_type_id)

    def get_session_type(self, session_type_id: str) -> SessionType:
        """Return a session type or raise NotFoundError."""
        session_type = self.session_types.get_session_type(session_type_id)
        if session_type is None:
            raise NotFoundError("session_type", session_type_id)
        return session_type

    def list_session_types(self) -> list[SessionType]:
        """Return all session types."""
        return self.session_types.list_session_types()

    def create_slots(
        self,
        session_type_id: str,
        start_time: datetime,
        end_time: datetime,
        recurrence: Recurrence = Recurrence.NONE,
        repeat_count: int = 1,
    ) -> list[TimeSlot]:
        """Create one slot or a recurring series of slots in a single batch."""
        if start_time.tzinfo is None or end_time.tzinfo is None:
            raise ValidationError("Start and end times need a timezone.")
        if start_time >= end_time:
            raise ValidationError("End time must be after start time.")
        if recurrence != Recurrence.NONE:
            if repeat_count < 1:
                raise ValidationError("Repeat count must be at least 1.")
            if repeat_count > self.max_series_length:
                raise ValidationError(
                    f"A series can have at most {self.max_series_length} slots."
                )
        if self.session_types.get_session_type(session_type_id) is None:
            raise NotFoundError("session_type", session_type_id)

        slots = [
            NewTimeSlot(
                session_type_id=session_type_id,
                start_time=occurrence_start,
                end_time=occurrence_end,
            )
            for occurrence_start, occurrence_end in expand_occurrences(
                start_time, end_time, recurrence, repeat_count
            )
        ]
        created = self.time_slots.create_time_slots(slots)
        _logger.info(
            "Created slots: session_type=%s recurrence=%s count=%s",
            session_type_id,
            recurrence.value,
            len(created),
        )
        return created

    def list_slots(self, session_type_id: str) -> list[TimeSlot]:
        """Return a session type's slots, earliest first."""
        slots = self.time_slots.list_time_slots(session_type_id)
        return sorted(slots, key=lambda slot: slot.start_time)

    def list_available_slots(
        self, session_type_id: str, now: datetime
    ) -> list[TimeSlot]:
        """Return future slots that still have free seats."""
        session_type = self.get_session_type(session_type_id)
        return [
            slot
            for slot in self.list_slots(session_type_id)
            if slot.start_time > now and not slot.is_full(session_type)
        ]

    def delete_slot(self, time_slot_id: str) -> None:
        """Delete a slot unless bookings still reference it."""
        if self.time_slots.get_time_slot(time_slot_id) is None:
            raise NotFoundError("time_slot", time_slot_id)
        if self.time_slots.count_slot_bookings(time_slot_id) > 0:
            _logger.warning("Refused to delete booked slot: id=%s", time_slot_id)
            raise SlotHasBookingsError(time_slot_id)
        self.time_slots.delete_time_slot(time_slot_id)
