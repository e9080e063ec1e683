"""Booking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from booking_manager.api.schemas import AffectedRowsPayload, BookingPayload

if TYPE_CHECKING:
    from booking_manager.containers import AppContainer

router = APIRouter(prefix="/booking", tags=["booking"])


@router.get("")
async def list_bookings(request: Request) -> list[BookingPayload]:
    """Return all bookings."""
    container: AppContainer = request.app.state.container
    bookings = await container.booking_service.list_bookings()
    return [BookingPayload.from_domain(booking) for booking in bookings]


@router.post("")
async def create_booking(booking: BookingPayload, request: Request) -> str:
    """Create a booking and return its id."""
    container: AppContainer = request.app.state.container
    return await container.booking_service.create_booking(booking.to_domain())


@router.get("/{booking_id}")
async def get_booking(booking_id: str, request: Request) -> BookingPayload:
    """Return a booking."""
    container: AppContainer = request.app.state.container
    booking = await container.booking_service.get_booking(booking_id)
    return BookingPayload.from_domain(booking)


@router.put("/{booking_id}")
async def update_booking(
    booking_id: str, booking: BookingPayload, request: Request
) -> BookingPayload:
    """Replace a booking, status flags included."""
    container: AppContainer = request.app.state.container
    updated = await container.booking_service.update_booking(
        booking_id, booking.to_domain()
    )
    return BookingPayload.from_domain(updated)


@router.patch("/notify/{booking_id}")
async def notify_booking(booking_id: str, request: Request) -> BookingPayload:
    """Mark a booking as notified."""
    container: AppContainer = request.app.state.container
    booking = await container.booking_service.notify_booking(booking_id)
    return BookingPayload.from_domain(booking)


@router.patch("/{booking_id}")
async def complete_booking(booking_id: str, request: Request) -> BookingPayload:
    """Mark a booking as completed."""
    container: AppContainer = request.app.state.container
    booking = await container.booking_service.complete_booking(booking_id)
    return BookingPayload.from_domain(booking)


@router.delete("/{booking_id}")
async def cancel_booking(booking_id: str, request: Request) -> AffectedRowsPayload:
    """Cancel a booking."""
    container: AppContainer = request.app.state.container
    result = await container.booking_service.cancel_booking(booking_id)
    return AffectedRowsPayload.from_domain(result)
