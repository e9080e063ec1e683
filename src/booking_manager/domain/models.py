"""Domain models for the booking manager."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Represents a user stored in the database."""

    name: str
    email: str
    password: str


@dataclass(frozen=True)
class Booking:
    """Represents a scheduled booking."""

    content: str
    booking_at: datetime
    user_id: str
    completed: bool = False
    notified: bool = False

    @classmethod
    def new(cls, content: str, user_id: str, booking_at: datetime) -> "Booking":
        """Build a fresh booking with both status flags cleared."""
        return cls(
            content=content,
            booking_at=booking_at,
            user_id=user_id,
            completed=False,
            notified=False,
        )


@dataclass(frozen=True)
class CheckItem:
    """Patch of booking status flags; ``None`` means the field is not sent."""

    completed: bool | None = None
    notified: bool | None = None

    def changes(self) -> dict[str, bool]:
        """Return only the fields explicitly present in the patch."""
        fields = {"completed": self.completed, "notified": self.notified}
        return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class AffectedRows:
    """Number of rows removed by a delete."""

    rows_affected: int
