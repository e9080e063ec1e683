"""User endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from booking_manager.api.schemas import AffectedRowsPayload, UserPayload

if TYPE_CHECKING:
    from booking_manager.containers import AppContainer

router = APIRouter(prefix="/user", tags=["user"])


@router.post("")
async def create_user(user: UserPayload, request: Request) -> str:
    """Create a user and return its id."""
    container: AppContainer = request.app.state.container
    return await container.user_service.create_user(user.to_domain())


@router.get("/{user_id}")
async def get_user(user_id: str, request: Request) -> UserPayload:
    """Return a user."""
    container: AppContainer = request.app.state.container
    user = await container.user_service.get_user(user_id)
    return UserPayload.from_domain(user)


@router.put("/{user_id}")
async def update_user(
    user_id: str, user: UserPayload, request: Request
) -> UserPayload:
    """Replace a user."""
    container: AppContainer = request.app.state.container
    updated = await container.user_service.update_user(user_id, user.to_domain())
    return UserPayload.from_domain(updated)


@router.delete("/{user_id}")
async def delete_user(user_id: str, request: Request) -> AffectedRowsPayload:
    """Delete a user."""
    container: AppContainer = request.app.state.container
    result = await container.user_service.delete_user(user_id)
    return AffectedRowsPayload.from_domain(result)
