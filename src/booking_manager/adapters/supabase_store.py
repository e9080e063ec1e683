"""Supabase-backed record store for users and bookings."""

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, AsyncSupabaseException, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from booking_manager.domain.ids import RecordId
from booking_manager.domain.models import AffectedRows, Booking, CheckItem, User
from booking_manager.errors import (
    AuthError,
    NotFound,
    StoreConnectionError,
    StoreError,
)
from booking_manager.services.bookings import BookingRepository
from booking_manager.services.users import UserRepository

_logger = logging.getLogger(__name__)

USER_TABLE = "user"
BOOKING_TABLE = "booking"

_USER_COLUMNS = "id, name, email, password"
_BOOKING_COLUMNS = "id, content, booking_at, user_id, completed, notified"
_AUTH_ERROR_CODES = {"401", "403", "PGRST301", "PGRST302"}


@dataclass
class SupabaseStore(UserRepository, BookingRepository):
    """Supabase implementation of the user and booking repositories."""

    client: AsyncClient
    http_client: httpx.AsyncClient
    namespace: str
    database: str

    @classmethod
    async def initialize(
        cls, url: str, service_key: str, namespace: str, database: str
    ) -> "SupabaseStore":
        """Connect with the service key and declare the logical tables."""
        http_client = httpx.AsyncClient()
        try:
            client = await acreate_client(
                url,
                service_key,
                options=AsyncClientOptions(schema=namespace, httpx_client=http_client),
            )
        except AsyncSupabaseException as exc:
            await http_client.aclose()
            message = str(exc)
            if "key" in message.lower():
                raise AuthError(message) from exc
            raise StoreConnectionError(message) from exc
        store = cls(
            client=client,
            http_client=http_client,
            namespace=namespace,
            database=database,
        )
        try:
            for table in (USER_TABLE, BOOKING_TABLE):
                await store._execute(
                    client.rpc(
                        "define_table",
                        {
                            "table_schema": namespace,
                            "table_name": store.table_name(table),
                            "table_kind": table,
                        },
                    )
                )
        except StoreError:
            await store.close()
            raise
        _logger.info(
            "Record store ready: namespace=%s database=%s", namespace, database
        )
        return store

    async def close(self) -> None:
        """Release the HTTP session shared by every Supabase sub-client."""
        await self.http_client.aclose()

    def table_name(self, table: str) -> str:
        """Physical table name for a logical table."""
        return f"{self.database}_{table}"

    async def create_user(self, name: str, email: str, password: str) -> str:
        """Insert a user row and return its bare id."""
        rows = await self._execute(
            self._table(USER_TABLE).insert(
                {"name": name, "email": email, "password": password}
            )
        )
        return self._created_id(rows, USER_TABLE)

    async def read_user(self, user_id: str) -> User:
        """Return a user by id."""
        record_id = RecordId.parse(user_id, USER_TABLE)
        rows = await self._execute(
            self._table(USER_TABLE)
            .select(_USER_COLUMNS)
            .eq("id", record_id.id)
            .limit(1)
        )
        return _parse_user(_first(rows, record_id))

    async def update_user(self, user_id: str, user: User) -> User:
        """Replace every field of a user row."""
        record_id = RecordId.parse(user_id, USER_TABLE)
        rows = await self._execute(
            self._table(USER_TABLE)
            .update(
                {"name": user.name, "email": user.email, "password": user.password}
            )
            .eq("id", record_id.id)
        )
        return _parse_user(_first(rows, record_id))

    async def delete_user(self, user_id: str) -> AffectedRows:
        """Delete a user row if present."""
        record_id = RecordId.parse(user_id, USER_TABLE)
        rows = await self._execute(
            self._table(USER_TABLE).delete().eq("id", record_id.id)
        )
        return AffectedRows(rows_affected=len(rows))

    async def create_booking(
        self, content: str, booking_at: datetime, user_id: str
    ) -> str:
        """Insert a booking with both status flags cleared."""
        booking = Booking.new(content, user_id, booking_at)
        rows = await self._execute(
            self._table(BOOKING_TABLE).insert(_booking_payload(booking))
        )
        return self._created_id(rows, BOOKING_TABLE)

    async def read_booking(self, booking_id: str) -> Booking:
        """Return a booking by id."""
        record_id = RecordId.parse(booking_id, BOOKING_TABLE)
        rows = await self._execute(
            self._table(BOOKING_TABLE)
            .select(_BOOKING_COLUMNS)
            .eq("id", record_id.id)
            .limit(1)
        )
        return _parse_booking(_first(rows, record_id))

    async def read_all_bookings(self) -> list[Booking]:
        """Return every booking row."""
        rows = await self._execute(
            self._table(BOOKING_TABLE).select(_BOOKING_COLUMNS)
        )
        return [_parse_booking(row) for row in rows]

    async def update_booking(self, booking_id: str, booking: Booking) -> Booking:
        """Replace every field of a booking row."""
        record_id = RecordId.parse(booking_id, BOOKING_TABLE)
        rows = await self._execute(
            self._table(BOOKING_TABLE)
            .update(_booking_payload(booking))
            .eq("id", record_id.id)
        )
        return _parse_booking(_first(rows, record_id))

    async def partial_update_booking(
        self, booking_id: str, patch: CheckItem
    ) -> Booking:
        """Merge the patch into a booking in a single update statement."""
        changes = patch.changes()
        if not changes:
            return await self.read_booking(booking_id)
        record_id = RecordId.parse(booking_id, BOOKING_TABLE)
        rows = await self._execute(
            self._table(BOOKING_TABLE).update(changes).eq("id", record_id.id)
        )
        return _parse_booking(_first(rows, record_id))

    async def delete_booking(self, booking_id: str) -> AffectedRows:
        """Delete a booking row if present."""
        record_id = RecordId.parse(booking_id, BOOKING_TABLE)
        rows = await self._execute(
            self._table(BOOKING_TABLE).delete().eq("id", record_id.id)
        )
        return AffectedRows(rows_affected=len(rows))

    def _table(self, table: str):  # type: ignore[no-untyped-def]
        return self.client.table(self.table_name(table))

    @staticmethod
    def _created_id(rows: list[dict[str, object]], table: str) -> str:
        if not rows:
            raise StoreError(f"Failed to create {table}")
        return RecordId.parse(str(rows[0]["id"]), table).id

    async def _execute(self, query) -> list[dict[str, object]]:  # type: ignore[no-untyped-def]
        try:
            response = await query.execute()
        except httpx.TransportError as exc:
            raise StoreConnectionError(f"Record store unreachable: {exc}") from exc
        except APIError as exc:
            if _is_auth_error(exc):
                raise AuthError(exc.message or "Credential rejected") from exc
            raise StoreError(exc.message or str(exc)) from exc
        return response.data or []


def _is_auth_error(exc: APIError) -> bool:
    if str(exc.code) in _AUTH_ERROR_CODES:
        return True
    return "invalid api key" in (exc.message or "").lower()


def _first(rows: list[dict[str, object]], record_id: RecordId) -> dict[str, object]:
    if not rows:
        raise NotFound(record_id.table, record_id.id)
    return rows[0]


def _booking_payload(booking: Booking) -> dict[str, object]:
    return {
        "content": booking.content,
        "booking_at": booking.booking_at.isoformat(),
        "user_id": booking.user_id,
        "completed": booking.completed,
        "notified": booking.notified,
    }


def _parse_user(row: dict[str, object]) -> User:
    return User(
        name=str(row["name"]),
        email=str(row["email"]),
        password=str(row["password"]),
    )


def _parse_booking(row: dict[str, object]) -> Booking:
    booking_at = row["booking_at"]
    return Booking(
        content=str(row["content"]),
        booking_at=(
            booking_at
            if isinstance(booking_at, datetime)
            else datetime.fromisoformat(str(booking_at))
        ),
        user_id=str(row["user_id"]),
        completed=bool(row.get("completed", False)),
        notified=bool(row.get("notified", False)),
    )
