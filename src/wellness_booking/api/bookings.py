"""Public endpoints for browsing slots and booking seats."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from wellness_booking.api.errors import error_response
from wellness_booking.api.schemas import (
    BookingRequest,
    serialize_booking,
    serialize_merged_booking,
    serialize_session_type,
    serialize_time_slot,
)

if TYPE_CHECKING:
    from wellness_booking.containers import AppContainer

router = APIRouter(tags=["bookings"])


async def require_user(x_user_id: str | None = Header(default=None)) -> str:
    """Return the authenticated caller id forwarded by the auth layer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id


@router.get("/session-types")
async def list_session_types(request: Request) -> dict[str, object]:
    """Return the session type catalog."""
    container: AppContainer = request.app.state.container
    session_types = container.catalog_service.list_session_types()
    return {"session_types": [serialize_session_type(st) for st in session_types]}


@router.get("/session-types/{session_type_id}/slots")
async def list_available_slots(
    session_type_id: str, request: Request
) -> dict[str, object]:
    """Return future slots of a session type that still have seats."""
    container: AppContainer = request.app.state.container
    slots = container.catalog_service.list_available_slots(
        session_type_id, now=datetime.now(tz=UTC)
    )
    return {"slots": [serialize_time_slot(slot) for slot in slots]}


@router.post("/bookings", status_code=status.HTTP_201_CREATED, response_model=None)
async def create_booking(
    payload: BookingRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object] | JSONResponse:
    """Reserve one seat in a time slot for the caller."""
    container: AppContainer = request.app.state.container
    result = container.booking_service.create_booking(
        user_id=user_id,
        time_slot_id=payload.time_slot_id,
        session_type_id=payload.session_type_id,
    )
    if not result.success or result.booking is None:
        return error_response(result.error, result.message or "")
    return {"booking": serialize_booking(result.booking)}


@router.get("/bookings")
async def list_my_bookings(
    request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's upcoming and past bookings."""
    container: AppContainer = request.app.state.container
    bookings = container.projection_service.list_user_bookings(
        user_id, now=datetime.now(tz=UTC)
    )
    return {
        "upcoming": [serialize_merged_booking(item) for item in bookings.upcoming],
        "past": [serialize_merged_booking(item) for item in bookings.past],
    }
