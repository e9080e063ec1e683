"""Record identifiers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordId:
    """Bare record id bound to the table it lives in."""

    table: str
    id: str

    @classmethod
    def parse(cls, raw: str, table: str) -> "RecordId":
        """Accept either a bare id or a table-qualified ``table:id``."""
        prefix = f"{table}:"
        if raw.startswith(prefix):
            return cls(table=table, id=raw[len(prefix) :])
        return cls(table=table, id=raw)

    def __str__(self) -> str:
        return f"{self.table}:{self.id}"
