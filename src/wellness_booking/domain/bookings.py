"""Domain models for bookings."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from wellness_booking.domain.catalog import SessionType, TimeSlot

LIVE_SESSION_WAITING = "WAITING"


class BookingStatus(StrEnum):
    """Lifecycle status of a booking."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class ReportStatus(StrEnum):
    """Delivery status of the post-session report."""

    PENDING = "pending"
    AVAILABLE = "available"


@dataclass(frozen=True)
class Booking:
    """A user's reservation of one time slot."""

    id: str
    user_id: str
    time_slot_id: str
    session_type_id: str
    booking_time: datetime
    status: BookingStatus
    session_token: str
    report_status: ReportStatus = ReportStatus.PENDING
    pdf_url: str | None = None
    pdf_thumbnail: str | None = None


@dataclass(frozen=True)
class BookingDraft:
    """Everything the store needs to commit a booking and its live session."""

    id: str
    user_id: str
    time_slot_id: str
    session_type_id: str
    session_token: str
    host_id: str


@dataclass(frozen=True)
class LiveSession:
    """Meeting record created alongside a booking."""

    id: str
    host_id: str
    user_id: str
    booking_id: str
    status: str = LIVE_SESSION_WAITING


@dataclass(frozen=True)
class MergedBooking:
    """A booking joined with its slot and session type for display."""

    booking: Booking
    time_slot: TimeSlot
    session_type: SessionType
