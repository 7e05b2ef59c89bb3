"""Booking transaction that reserves a seat without overbooking."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from wellness_booking.domain.bookings import Booking, BookingDraft
from wellness_booking.domain.catalog import SessionType, TimeSlot
from wellness_booking.domain.errors import (
    DomainError,
    ErrorCode,
    NotFoundError,
    SlotFullError,
    TransientConflictError,
    ValidationError,
)

_logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    """Snapshot reads plus a conditional commit for one booking attempt."""

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        """Return the latest committed state of a slot, if present."""

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        """Return a session type by id, if present."""

    def commit_booking(
        self, draft: BookingDraft, expected_count: int
    ) -> Booking | None:
        """Atomically bump the slot counter and create the booking.

        The counter is only incremented when it still equals
        ``expected_count``; the booking and its live session are created in
        the same unit. Returns None, writing nothing, when the counter moved.
        """


@dataclass(frozen=True)
class BookingResult:
    """Outcome of a booking attempt as reported to the caller."""

    success: bool
    booking: Booking | None = None
    error: ErrorCode | None = None
    message: str | None = None


def new_session_token() -> str:
    """Return an opaque token that later authorizes joining the session."""
    return f"VISIO-{uuid4().hex}"


@dataclass
class BookingService:
    """Reserves seats in time slots for authenticated users."""

    store: BookingStore
    host_id: str
    max_attempts: int = 5

    def create_booking(
        self, user_id: str, time_slot_id: str, session_type_id: str
    ) -> BookingResult:
        """Book a seat and report success or a typed failure."""
        try:
            booking = self.reserve(user_id, time_slot_id, session_type_id)
        except DomainError as exc:
            return BookingResult(success=False, error=exc.code, message=exc.message)
        return BookingResult(success=True, booking=booking)

    def reserve(self, user_id: str, time_slot_id: str, session_type_id: str) -> Booking:
        """Book a seat, retrying from fresh reads when a concurrent writer wins."""
        if not user_id or not time_slot_id or not session_type_id:
            raise ValidationError("Missing required information.")

        draft = BookingDraft(
            id=str(uuid4()),
            user_id=user_id,
            time_slot_id=time_slot_id,
            session_type_id=session_type_id,
            session_token=new_session_token(),
            host_id=self.host_id,
        )
        for attempt in range(1, self.max_attempts + 1):
            time_slot = self.store.get_time_slot(time_slot_id)
            if time_slot is None:
                raise NotFoundError("time_slot", time_slot_id)
            session_type = self.store.get_session_type(session_type_id)
            if session_type is None or time_slot.session_type_id != session_type.id:
                raise NotFoundError("session_type", session_type_id)
            if time_slot.is_full(session_type):
                _logger.info("Slot full: slot=%s user=%s", time_slot_id, user_id)
                raise SlotFullError(time_slot_id)

            booking = self.store.commit_booking(
                draft, expected_count=time_slot.booked_participants_count
            )
            if booking is not None:
                _logger.info(
                    "Booking committed: id=%s slot=%s user=%s seat=%s/%s",
                    booking.id,
                    time_slot_id,
                    user_id,
                    time_slot.booked_participants_count + 1,
                    session_type.max_participants,
                )
                return booking
            _logger.info(
                "Booking conflict on slot %s (attempt %s/%s)",
                time_slot_id,
                attempt,
                self.max_attempts,
            )

        _logger.warning(
            "Booking retries exhausted: slot=%s user=%s attempts=%s",
            time_slot_id,
            user_id,
            self.max_attempts,
        )
        raise TransientConflictError(time_slot_id, self.max_attempts)
