"""Booking lifecycle services."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from booking_manager.domain.models import AffectedRows, Booking, CheckItem

_logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    async def create_booking(
        self, content: str, booking_at: datetime, user_id: str
    ) -> str:
        """Insert a booking with cleared flags and return its bare id."""

    async def read_booking(self, booking_id: str) -> Booking:
        """Return the booking for a bare or ``booking:``-qualified id."""

    async def read_all_bookings(self) -> list[Booking]:
        """Return every booking in the store's natural order."""

    async def update_booking(self, booking_id: str, booking: Booking) -> Booking:
        """Replace every field of a booking, flags included."""

    async def partial_update_booking(
        self, booking_id: str, patch: CheckItem
    ) -> Booking:
        """Merge the fields present in the patch into an existing booking."""

    async def delete_booking(self, booking_id: str) -> AffectedRows:
        """Delete a booking, reporting whether a row existed."""


@dataclass
class BookingService:
    """Application service for booking operations."""

    repository: BookingRepository

    async def create_booking(self, booking: Booking) -> str:
        """Create a booking; status flags supplied by the caller are ignored."""
        booking_id = await self.repository.create_booking(
            booking.content, booking.booking_at, booking.user_id
        )
        _logger.info(
            "Booking created: id=%s user_id=%s", booking_id, booking.user_id
        )
        return booking_id

    async def get_booking(self, booking_id: str) -> Booking:
        """Return a booking by id."""
        return await self.repository.read_booking(booking_id)

    async def list_bookings(self) -> list[Booking]:
        """Return all bookings."""
        return await self.repository.read_all_bookings()

    async def update_booking(self, booking_id: str, booking: Booking) -> Booking:
        """Replace a booking, including its status flags."""
        updated = await self.repository.update_booking(booking_id, booking)
        _logger.info("Booking replaced: id=%s", booking_id)
        return updated

    async def complete_booking(self, booking_id: str) -> Booking:
        """Mark a booking as completed."""
        booking = await self.repository.partial_update_booking(
            booking_id, CheckItem(completed=True)
        )
        _logger.info("Booking completed: id=%s", booking_id)
        return booking

    async def notify_booking(self, booking_id: str) -> Booking:
        """Mark a booking as notified."""
        booking = await self.repository.partial_update_booking(
            booking_id, CheckItem(notified=True)
        )
        _logger.info("Booking notified: id=%s", booking_id)
        return booking

    async def cancel_booking(self, booking_id: str) -> AffectedRows:
        """Delete a booking."""
        result = await self.repository.delete_booking(booking_id)
        _logger.info(
            "Booking cancelled: id=%s rows_affected=%s",
            booking_id,
            result.rows_affected,
        )
        return result
