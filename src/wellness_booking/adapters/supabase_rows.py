"""Row conversions shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID

from wellness_booking.domain.bookings import Booking, BookingStatus, ReportStatus
from wellness_booking.domain.catalog import SessionModel, SessionType, TimeSlot

SESSION_TYPE_COLUMNS = (
    "id, name, description, session_model, max_participants, price, currency, "
    "image_url"
)
TIME_SLOT_COLUMNS = "id, session_type_id, start_time, end_time, booked_participants_count"
BOOKING_COLUMNS = (
    "id, user_id, time_slot_id, session_type_id, booking_time, status, "
    "session_token, report_status, pdf_url, pdf_thumbnail"
)


def is_row_id(value: str) -> bool:
    """Return whether a value can match a uuid primary key."""
    try:
        UUID(value)
    except (TypeError, ValueError):
        return False
    return True


def parse_session_type(row: dict[str, object]) -> SessionType:
    return SessionType(
        id=str(row["id"]),
        name=dict(row.get("name") or {}),
        description=dict(row.get("description") or {}),
        session_model=SessionModel(row["session_model"]),
        max_participants=int(row["max_participants"]),
        price=int(row.get("price", 0)),
        currency=str(row.get("currency", "")),
        image_url=row.get("image_url"),
    )


def parse_time_slot(row: dict[str, object]) -> TimeSlot:
    return TimeSlot(
        id=str(row["id"]),
        session_type_id=str(row["session_type_id"]),
        start_time=datetime.fromisoformat(row["start_time"]),
        end_time=datetime.fromisoformat(row["end_time"]),
        booked_participants_count=int(row.get("booked_participants_count", 0)),
    )


def parse_booking(row: dict[str, object]) -> Booking:
    return Booking(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        time_slot_id=str(row["time_slot_id"]),
        session_type_id=str(row["session_type_id"]),
        booking_time=datetime.fromisoformat(row["booking_time"]),
        status=BookingStatus(row["status"]),
        session_token=str(row["session_token"]),
        report_status=ReportStatus(row.get("report_status") or "pending"),
        pdf_url=row.get("pdf_url"),
        pdf_thumbnail=row.get("pdf_thumbnail"),
    )
