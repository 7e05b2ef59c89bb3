"""Request models and response serializers for the HTTP API."""

from pydantic import AwareDatetime, BaseModel, Field

from wellness_booking.domain.bookings import Booking, MergedBooking
from wellness_booking.domain.catalog import (
    SessionModel,
    SessionType,
    SessionTypeInput,
    TimeSlot,
)
from wellness_booking.domain.recurrence import Recurrence


class SessionTypeRequest(BaseModel):
    """Admin payload for creating or editing a session type."""

    name: dict[str, str]
    description: dict[str, str] = Field(default_factory=dict)
    session_model: SessionModel
    max_participants: int = Field(ge=1)
    price: int = Field(ge=0)
    currency: str = Field(min_length=2)
    image_url: str | None = None

    def to_input(self) -> SessionTypeInput:
        return SessionTypeInput(
            name=self.name,
            description=self.description,
            session_model=self.session_model,
            max_participants=self.max_participants,
            price=self.price,
            currency=self.currency,
            image_url=self.image_url,
        )


class SlotSeriesRequest(BaseModel):
    """Admin payload for one slot or a recurring series."""

    start_time: AwareDatetime
    end_time: AwareDatetime
    recurrence: Recurrence = Recurrence.NONE
    repeat_count: int = 1


class BookingRequest(BaseModel):
    """User payload for reserving a seat."""

    time_slot_id: str = Field(min_length=1)
    session_type_id: str = Field(min_length=1)


def serialize_session_type(session_type: SessionType) -> dict[str, object]:
    return {
        "id": session_type.id,
        "name": session_type.name,
        "description": session_type.description,
        "session_model": session_type.session_model.value,
        "max_participants": session_type.max_participants,
        "price": session_type.price,
        "currency": session_type.currency,
        "image_url": session_type.image_url,
    }


def serialize_time_slot(time_slot: TimeSlot) -> dict[str, object]:
    return {
        "id": time_slot.id,
        "session_type_id": time_slot.session_type_id,
        "start_time": time_slot.start_time.isoformat(),
        "end_time": time_slot.end_time.isoformat(),
        "booked_participants_count": time_slot.booked_participants_count,
    }


def serialize_booking(booking: Booking) -> dict[str, object]:
    return {
        "id": booking.id,
        "user_id": booking.user_id,
        "time_slot_id": booking.time_slot_id,
        "session_type_id": booking.session_type_id,
        "booking_time": booking.booking_time.isoformat(),
        "status": booking.status.value,
        "session_token": booking.session_token,
        "report_status": booking.report_status.value,
        "pdf_url": booking.pdf_url,
        "pdf_thumbnail": booking.pdf_thumbnail,
    }


def serialize_merged_booking(merged: MergedBooking) -> dict[str, object]:
    payload = serialize_booking(merged.booking)
    payload["time_slot"] = serialize_time_slot(merged.time_slot)
    payload["session_type"] = serialize_session_type(merged.session_type)
    return payload
