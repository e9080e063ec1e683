"""Errors raised by the record store layer."""


class StoreError(Exception):
    """Base error for record store failures."""


class NotFound(StoreError):
    """Raised when an id does not resolve to a stored row."""

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"{table} {record_id} not found")
        self.table = table
        self.record_id = record_id


class AuthError(StoreError):
    """Raised when the record store rejects the administrative credential."""


class StoreConnectionError(StoreError):
    """Raised when the record store cannot be reached."""
