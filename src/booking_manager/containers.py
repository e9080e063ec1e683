"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from booking_manager.adapters.supabase_store import SupabaseStore
from booking_manager.config import Settings
from booking_manager.services.bookings import BookingRepository, BookingService
from booking_manager.services.users import UserRepository, UserService


class Store(UserRepository, BookingRepository, Protocol):
    """Record store implementing both repository contracts."""

    async def close(self) -> None:
        """Release the store connection."""


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: Store
    user_service: UserService
    booking_service: BookingService
    close_resources: Callable[[], Awaitable[None]]


async def build_container(settings: Settings | None = None) -> AppContainer:
    """Connect the record store and wire the services around it."""
    resolved_settings = settings or Settings()
    store = await SupabaseStore.initialize(
        url=resolved_settings.supabase_url,
        service_key=resolved_settings.supabase_service_key,
        namespace=resolved_settings.store_namespace,
        database=resolved_settings.store_database,
    )

    async def close_resources() -> None:
        await store.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        user_service=UserService(store),
        booking_service=BookingService(store),
        close_resources=close_resources,
    )
