"""Domain models for stored records."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, eq=False)
class Record:
    """Represents a record owned by the authenticated user.

    Records are identified by ``id``: two snapshots of the same record taken
    at different times compare equal and hash alike.
    """

    id: str
    name: str
    path: str
    last_modification_time: datetime
    tags: tuple[str, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass
class DeletionReport:
    """Outcome of a sequential batch deletion, in input order."""

    succeeded: list[Record] = field(default_factory=list)
    failed: list[tuple[Record, Exception]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        """Return how many deletions were attempted."""
        return len(self.succeeded) + len(self.failed)
