"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from booking_manager.api.app import create_app
from booking_manager.config import Settings
from booking_manager.containers import AppContainer
from booking_manager.domain.ids import RecordId
from booking_manager.domain.models import AffectedRows, Booking, CheckItem, User
from booking_manager.errors import NotFound
from booking_manager.services.bookings import BookingRepository, BookingService
from booking_manager.services.users import UserRepository, UserService


@dataclass
class InMemoryStore(UserRepository, BookingRepository):
    """In-memory record store for tests."""

    users: dict[str, User] = field(default_factory=dict)
    bookings: dict[str, Booking] = field(default_factory=dict)
    closed: bool = False

    async def create_user(self, name: str, email: str, password: str) -> str:
        user_id = uuid4().hex
        self.users[user_id] = User(name=name, email=email, password=password)
        return user_id

    async def read_user(self, user_id: str) -> User:
        record_id = RecordId.parse(user_id, "user")
        if record_id.id not in self.users:
            raise NotFound("user", record_id.id)
        return self.users[record_id.id]

    async def update_user(self, user_id: str, user: User) -> User:
        record_id = RecordId.parse(user_id, "user")
        if record_id.id not in self.users:
            raise NotFound("user", record_id.id)
        self.users[record_id.id] = user
        return user

    async def delete_user(self, user_id: str) -> AffectedRows:
        record_id = RecordId.parse(user_id, "user")
        removed = self.users.pop(record_id.id, None)
        return AffectedRows(rows_affected=0 if removed is None else 1)

    async def create_booking(
        self, content: str, booking_at: datetime, user_id: str
    ) -> str:
        booking_id = uuid4().hex
        self.bookings[booking_id] = Booking.new(content, user_id, booking_at)
        return booking_id

    async def read_booking(self, booking_id: str) -> Booking:
        record_id = RecordId.parse(booking_id, "booking")
        if record_id.id not in self.bookings:
            raise NotFound("booking", record_id.id)
        return self.bookings[record_id.id]

    async def read_all_bookings(self) -> list[Booking]:
        return list(self.bookings.values())

    async def update_booking(self, booking_id: str, booking: Booking) -> Booking:
        record_id = RecordId.parse(booking_id, "booking")
        if record_id.id not in self.bookings:
            raise NotFound("booking", record_id.id)
        self.bookings[record_id.id] = booking
        return booking

    async def partial_update_booking(
        self, booking_id: str, patch: CheckItem
    ) -> Booking:
        record_id = RecordId.parse(booking_id, "booking")
        existing = self.bookings.get(record_id.id)
        if existing is None:
            raise NotFound("booking", record_id.id)
        merged = Booking(
            content=existing.content,
            booking_at=existing.booking_at,
            user_id=existing.user_id,
            completed=patch.changes().get("completed", existing.completed),
            notified=patch.changes().get("notified", existing.notified),
        )
        self.bookings[record_id.id] = merged
        return merged

    async def delete_booking(self, booking_id: str) -> AffectedRows:
        record_id = RecordId.parse(booking_id, "booking")
        removed = self.bookings.pop(record_id.id, None)
        return AffectedRows(rows_affected=0 if removed is None else 1)

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeQuery:
    """Query builder that records calls and replays queued results."""

    name: str
    results: dict[str, list[object]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "delete": [],
            "rpc": [],
        }
    )
    calls: list[tuple[str, object]] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, result: object) -> None:
        self.results[action].append(result)

    def _start(self, action: str, payload: object | None = None) -> "FakeQuery":
        self._action = action
        self.last_payload = payload
        self.calls.append((action, payload))
        return self

    def select(self, *_args) -> "FakeQuery":  # type: ignore[no-untyped-def]
        return self._start("select")

    def insert(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        return self._start("insert", payload)

    def update(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        return self._start("update", payload)

    def delete(self) -> "FakeQuery":
        return self._start("delete")

    def eq(self, column: str, value) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeQuery":
        return self

    async def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.results.get(action, [])
        result = queue.pop(0) if queue else []
        if isinstance(result, Exception):
            raise result
        return FakeResponse(data=result)  # type: ignore[arg-type]


@dataclass
class FakeSupabaseClient:
    """Fake async Supabase client keyed by physical table name."""

    tables: dict[str, FakeQuery] = field(default_factory=dict)
    functions: dict[str, FakeQuery] = field(default_factory=dict)
    options: object | None = None

    def table(self, name: str) -> FakeQuery:
        if name not in self.tables:
            self.tables[name] = FakeQuery(name=name)
        return self.tables[name]

    def rpc(self, name: str, params: dict[str, object]) -> FakeQuery:
        if name not in self.functions:
            self.functions[name] = FakeQuery(name=name)
        return self.functions[name]._start("rpc", params)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        store_namespace="public",
        store_database="app",
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(settings: Settings, store: InMemoryStore) -> AppContainer:
    return AppContainer(
        settings=settings,
        store=store,
        user_service=UserService(store),
        booking_service=BookingService(store),
        close_resources=store.close,
    )


@pytest.fixture
def client(container: AppContainer, settings: Settings) -> Iterator[TestClient]:
    async def factory() -> AppContainer:
        return container

    with TestClient(create_app(factory, settings)) as test_client:
        yield test_client
