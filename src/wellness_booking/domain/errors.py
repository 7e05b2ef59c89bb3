"""Domain error codes for booking and catalog operations."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    SLOT_FULL = "SLOT_FULL"
    TRANSIENT_CONFLICT = "TRANSIENT_CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SLOT_HAS_BOOKINGS = "SLOT_HAS_BOOKINGS"
    SESSION_TYPE_HAS_BOOKINGS = "SESSION_TYPE_HAS_BOOKINGS"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Raised when a referenced slot or session type does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="This offering is no longer available.",
        )
        self.entity = entity
        self.entity_id = entity_id


class SlotFullError(DomainError):
    """Raised when a time slot has no remaining capacity."""

    def __init__(self, time_slot_id: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_FULL,
            message="This time slot is now full. Please pick another time.",
        )
        self.time_slot_id = time_slot_id


class TransientConflictError(DomainError):
    """Raised when concurrent writers kept winning until retries ran out."""

    def __init__(self, time_slot_id: str, attempts: int) -> None:
        super().__init__(
            code=ErrorCode.TRANSIENT_CONFLICT,
            message="The booking could not be completed. Please try again.",
        )
        self.time_slot_id = time_slot_id
        self.attempts = attempts


class ValidationError(DomainError):
    """Raised when input is rejected before any write."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class SlotHasBookingsError(DomainError):
    """Raised when deleting a slot that bookings still reference."""

    def __init__(self, time_slot_id: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_HAS_BOOKINGS,
            message="This time slot has bookings and cannot be deleted.",
        )
        self.time_slot_id = time_slot_id


class SessionTypeHasBookingsError(DomainError):
    """Raised when deleting a session type whose slots have bookings."""

    def __init__(self, session_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_TYPE_HAS_BOOKINGS,
            message="This session type has bookings and cannot be deleted.",
        )
        self.session_type_id = session_type_id
