"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from wellness_booking.api.schemas import (
    SessionTypeRequest,
    SlotSeriesRequest,
    serialize_merged_booking,
    serialize_session_type,
    serialize_time_slot,
)

if TYPE_CHECKING:
    from wellness_booking.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post(
    "/session-types",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_session_type(
    payload: SessionTypeRequest, request: Request
) -> dict[str, object]:
    """Create a session type."""
    container: AppContainer = request.app.state.container
    session_type = container.catalog_service.create_session_type(payload.to_input())
    return {"session_type": serialize_session_type(session_type)}


@router.put("/session-types/{session_type_id}", dependencies=[Depends(require_admin)])
async def update_session_type(
    session_type_id: str, payload: SessionTypeRequest, request: Request
) -> dict[str, object]:
    """Edit a session type without touching its existing slots."""
    container: AppContainer = request.app.state.container
    session_type = container.catalog_service.update_session_type(
        session_type_id, payload.to_input()
    )
    return {"session_type": serialize_session_type(session_type)}


@router.delete(
    "/session-types/{session_type_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_session_type(session_type_id: str, request: Request) -> None:
    """Delete a session type."""
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_session_type(session_type_id)


@router.get(
    "/session-types/{session_type_id}/slots", dependencies=[Depends(require_admin)]
)
async def list_slots(session_type_id: str, request: Request) -> dict[str, object]:
    """Return every slot of a session type, earliest first."""
    container: AppContainer = request.app.state.container
    slots = container.catalog_service.list_slots(session_type_id)
    return {"slots": [serialize_time_slot(slot) for slot in slots]}


@router.post(
    "/session-types/{session_type_id}/slots",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_slots(
    session_type_id: str, payload: SlotSeriesRequest, request: Request
) -> dict[str, object]:
    """Create one slot or a recurring series."""
    container: AppContainer = request.app.state.container
    slots = container.catalog_service.create_slots(
        session_type_id,
        start_time=payload.start_time,
        end_time=payload.end_time,
        recurrence=payload.recurrence,
        repeat_count=payload.repeat_count,
    )
    return {"slot_ids": [slot.id for slot in slots]}


@router.delete(
    "/slots/{time_slot_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_slot(time_slot_id: str, request: Request) -> None:
    """Delete a slot that nobody has booked."""
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_slot(time_slot_id)


@router.get("/bookings/today", dependencies=[Depends(require_admin)])
async def todays_bookings(request: Request) -> dict[str, object]:
    """Return bookings whose slot starts today."""
    container: AppContainer = request.app.state.container
    bookings = container.projection_service.list_todays_bookings(
        datetime.now(tz=UTC), container.settings.timezone
    )
    return {"bookings": [serialize_merged_booking(item) for item in bookings]}


@router.get("/bookings/past", dependencies=[Depends(require_admin)])
async def past_bookings(request: Request) -> dict[str, object]:
    """Return finished bookings from previous days."""
    container: AppContainer = request.app.state.container
    bookings = container.projection_service.list_past_bookings(
        datetime.now(tz=UTC), container.settings.timezone
    )
    return {"bookings": [serialize_merged_booking(item) for item in bookings]}
