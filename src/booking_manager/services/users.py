"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from booking_manager.domain.models import AffectedRows, User

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    async def create_user(self, name: str, email: str, password: str) -> str:
        """Insert a user and return its bare id."""

    async def read_user(self, user_id: str) -> User:
        """Return the user for a bare or ``user:``-qualified id."""

    async def update_user(self, user_id: str, user: User) -> User:
        """Replace every field of an existing user and return the stored row."""

    async def delete_user(self, user_id: str) -> AffectedRows:
        """Delete a user, reporting whether a row existed."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    async def create_user(self, user: User) -> str:
        """Create a user and return its id."""
        user_id = await self.repository.create_user(
            user.name, user.email, user.password
        )
        _logger.info("User created: id=%s", user_id)
        return user_id

    async def get_user(self, user_id: str) -> User:
        """Return a user by id."""
        return await self.repository.read_user(user_id)

    async def update_user(self, user_id: str, user: User) -> User:
        """Replace a user's fields."""
        updated = await self.repository.update_user(user_id, user)
        _logger.info("User updated: id=%s", user_id)
        return updated

    async def delete_user(self, user_id: str) -> AffectedRows:
        """Delete a user."""
        result = await self.repository.delete_user(user_id)
        _logger.info(
            "User deleted: id=%s rows_affected=%s", user_id, result.rows_affected
        )
        return result
