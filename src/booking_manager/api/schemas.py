"""Pydantic models for request and response bodies."""

from pydantic import AwareDatetime, BaseModel

from booking_manager.domain.models import AffectedRows, Booking, User


class UserPayload(BaseModel):
    """User payload."""

    name: str
    email: str
    password: str

    @classmethod
    def from_domain(cls, user: User) -> "UserPayload":
        return cls(name=user.name, email=user.email, password=user.password)

    def to_domain(self) -> User:
        return User(name=self.name, email=self.email, password=self.password)


class BookingPayload(BaseModel):
    """Booking payload."""

    content: str
    booking_at: AwareDatetime
    user_id: str
    completed: bool = False
    notified: bool = False

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingPayload":
        return cls(
            content=booking.content,
            booking_at=booking.booking_at,
            user_id=booking.user_id,
            completed=booking.completed,
            notified=booking.notified,
        )

    def to_domain(self) -> Booking:
        return Booking(
            content=self.content,
            booking_at=self.booking_at,
            user_id=self.user_id,
            completed=self.completed,
            notified=self.notified,
        )


class AffectedRowsPayload(BaseModel):
    """Delete result payload."""

    rows_affected: int

    @classmethod
    def from_domain(cls, result: AffectedRows) -> "AffectedRowsPayload":
        return cls(rows_affected=result.rows_affected)
