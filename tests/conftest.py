"""Shared test fixtures."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from wellness_booking.config import Settings
from wellness_booking.containers import AppContainer
from wellness_booking.domain.bookings import (
    Booking,
    BookingDraft,
    BookingStatus,
    LiveSession,
)
from wellness_booking.domain.catalog import (
    NewTimeSlot,
    SessionModel,
    SessionType,
    SessionTypeInput,
    TimeSlot,
)
from wellness_booking.services.bookings import BookingService, BookingStore
from wellness_booking.services.catalog import (
    CatalogService,
    SessionTypeRepository,
    TimeSlotRepository,
)
from wellness_booking.services.projection import (
    BookingProjectionService,
    BookingReadRepository,
)

FIXED_NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
TEST_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryDatabase:
    """Shared tables guarded by one lock, standing in for Postgres."""

    session_types: dict[str, SessionType] = field(default_factory=dict)
    time_slots: dict[str, TimeSlot] = field(default_factory=dict)
    bookings: dict[str, Booking] = field(default_factory=dict)
    live_sessions: dict[str, LiveSession] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)
    clock: Callable[[], datetime] = _utc_now
    fail_next_batch: bool = False


@dataclass
class InMemorySessionTypeRepository(SessionTypeRepository):
    """In-memory session type repository for tests."""

    db: InMemoryDatabase

    def create_session_type(self, data: SessionTypeInput) -> SessionType:
        session_type = SessionType(id=str(uuid4()), **vars(data))
        self.db.session_types[session_type.id] = session_type
        return session_type

    def update_session_type(
        self, session_type_id: str, data: SessionTypeInput
    ) -> SessionType | None:
        if session_type_id not in self.db.session_types:
            return None
        session_type = SessionType(id=session_type_id, **vars(data))
        self.db.session_types[session_type_id] = session_type
        return session_type

    def delete_session_type(self, session_type_id: str) -> None:
        self.db.session_types.pop(session_type_id, None)
        for slot_id in [
            slot.id
            for slot in self.db.time_slots.values()
            if slot.session_type_id == session_type_id
        ]:
            del self.db.time_slots[slot_id]

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        return self.db.session_types.get(session_type_id)

    def list_session_types(self) -> list[SessionType]:
        return list(self.db.session_types.values())


@dataclass
class InMemoryTimeSlotRepository(TimeSlotRepository):
    """In-memory time slot repository with all-or-nothing batches."""

    db: InMemoryDatabase

    def create_time_slots(self, slots: list[NewTimeSlot]) -> list[TimeSlot]:
        with self.db.lock:
            if self.db.fail_next_batch:
                self.db.fail_next_batch = False
                raise RuntimeError("Failed to create time slots")
            created = [
                TimeSlot(
                    id=str(uuid4()),
                    session_type_id=slot.session_type_id,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                )
                for slot in slots
            ]
            for slot in created:
                self.db.time_slots[slot.id] = slot
        return created

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        return self.db.time_slots.get(time_slot_id)

    def list_time_slots(self, session_type_id: str) -> list[TimeSlot]:
        return [
            slot
            for slot in self.db.time_slots.values()
            if slot.session_type_id == session_type_id
        ]

    def count_slot_bookings(self, time_slot_id: str) -> int:
        return sum(
            1
            for booking in self.db.bookings.values()
            if booking.time_slot_id == time_slot_id
        )

    def count_session_type_bookings(self, session_type_id: str) -> int:
        return sum(
            1
            for booking in self.db.bookings.values()
            if booking.session_type_id == session_type_id
        )

    def delete_time_slot(self, time_slot_id: str) -> None:
        self.db.time_slots.pop(time_slot_id, None)


@dataclass
class InMemoryBookingStore(BookingStore, BookingReadRepository):
    """In-memory booking store with a compare-and-swap commit."""

    db: InMemoryDatabase

    def get_time_slot(self, time_slot_id: str) -> TimeSlot | None:
        with self.db.lock:
            return self.db.time_slots.get(time_slot_id)

    def get_session_type(self, session_type_id: str) -> SessionType | None:
        with self.db.lock:
            return self.db.session_types.get(session_type_id)

    def commit_booking(
        self, draft: BookingDraft, expected_count: int
    ) -> Booking | None:
        with self.db.lock:
            slot = self.db.time_slots.get(draft.time_slot_id)
            if slot is None or slot.booked_participants_count != expected_count:
                return None
            booking = Booking(
                id=draft.id,
                user_id=draft.user_id,
                time_slot_id=draft.time_slot_id,
                session_type_id=draft.session_type_id,
                booking_time=self.db.clock(),
                status=BookingStatus.CONFIRMED,
                session_token=draft.session_token,
            )
            self.db.time_slots[slot.id] = replace(
                slot, booked_participants_count=expected_count + 1
            )
            self.db.bookings[booking.id] = booking
            self.db.live_sessions[booking.id] = LiveSession(
                id=booking.id,
                host_id=draft.host_id,
                user_id=draft.user_id,
                booking_id=booking.id,
            )
            return booking

    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        return [
            booking
            for booking in self.db.bookings.values()
            if user_id is None or booking.user_id == user_id
        ]

    def list_time_slots_by_ids(self, time_slot_ids: list[str]) -> list[TimeSlot]:
        return [
            self.db.time_slots[slot_id]
            for slot_id in time_slot_ids
            if slot_id in self.db.time_slots
        ]

    def list_session_types_by_ids(
        self, session_type_ids: list[str]
    ) -> list[SessionType]:
        return [
            self.db.session_types[type_id]
            for type_id in session_type_ids
            if type_id in self.db.session_types
        ]


def make_session_type(
    session_type_id: str = "A",
    max_participants: int = 1,
    session_model: SessionModel = SessionModel.PRIVATE,
) -> SessionType:
    return SessionType(
        id=session_type_id,
        name={"en": "Energy healing", "fr": "Soin énergétique"},
        description={"en": "One hour session"},
        session_model=session_model,
        max_participants=max_participants,
        price=6000,
        currency="eur",
    )


def make_time_slot(
    time_slot_id: str = "S1",
    session_type_id: str = "A",
    start_time: datetime = datetime(2024, 1, 1, 10, 0, tzinfo=UTC),
    end_time: datetime = datetime(2024, 1, 1, 11, 0, tzinfo=UTC),
    booked_participants_count: int = 0,
) -> TimeSlot:
    return TimeSlot(
        id=time_slot_id,
        session_type_id=session_type_id,
        start_time=start_time,
        end_time=end_time,
        booked_participants_count=booked_participants_count,
    )


def confirmed_count(db: InMemoryDatabase, time_slot_id: str) -> int:
    return sum(
        1
        for booking in db.bookings.values()
        if booking.time_slot_id == time_slot_id
        and booking.status == BookingStatus.CONFIRMED
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SERVICE_KEY,
        admin_token="admin-token",
        host_user_id="host-1",
    )


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase(clock=lambda: FIXED_NOW)


@pytest.fixture
def container(settings: Settings, db: InMemoryDatabase) -> AppContainer:
    booking_store = InMemoryBookingStore(db)
    catalog_service = CatalogService(
        session_types=InMemorySessionTypeRepository(db),
        time_slots=InMemoryTimeSlotRepository(db),
        max_series_length=settings.max_series_length,
    )
    booking_service = BookingService(
        store=booking_store,
        host_id=settings.host_user_id,
        max_attempts=settings.booking_max_attempts,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        booking_service=booking_service,
        projection_service=BookingProjectionService(booking_store),
        close_resources=close_resources,
    )
