"""ASGI entrypoint for the booking manager API."""

from booking_manager.api.app import create_app
from booking_manager.config import Settings
from booking_manager.containers import AppContainer, build_container

settings = Settings()


async def _build_container() -> AppContainer:
    return await build_container(settings)


app = create_app(_build_container, settings)
