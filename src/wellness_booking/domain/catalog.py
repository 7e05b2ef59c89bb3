"""Domain models for the session catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class SessionModel(StrEnum):
    """Capacity model of a session type."""

    PRIVATE = "private"
    SMALL_GROUP = "small_group"
    LARGE_GROUP = "large_group"


@dataclass(frozen=True)
class SessionType:
    """A bookable category of session with price and capacity."""

    id: str
    name: dict[str, str]
    description: dict[str, str]
    session_model: SessionModel
    max_participants: int
    price: int
    currency: str
    image_url: str | None = None


@dataclass(frozen=True)
class TimeSlot:
    """One concrete bookable interval of a session type."""

    id: str
    session_type_id: str
    start_time: datetime
    end_time: datetime
    booked_participants_count: int = 0

    def remaining_capacity(self, session_type: SessionType) -> int:
        """Return how many seats are still free."""
        return max(session_type.max_participants - self.booked_participants_count, 0)

    def is_full(self, session_type: SessionType) -> bool:
        """Return True once the booked count reaches the session capacity."""
        return self.booked_participants_count >= session_type.max_participants


@dataclass(frozen=True)
class NewTimeSlot:
    """Slot payload before persistence assigns an id."""

    session_type_id: str
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class SessionTypeInput:
    """Editable fields of a session type."""

    name: dict[str, str]
    description: dict[str, str]
    session_model: SessionModel
    max_participants: int
    price: int
    currency: str
    image_url: str | None = None
