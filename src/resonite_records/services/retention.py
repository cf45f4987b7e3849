"""Retention policy for superseded versions of a record."""

import logging
from dataclasses import dataclass

from resonite_records.domain.records import DeletionReport, Record
from resonite_records.domain.session import Session
from resonite_records.services.queries import QueryService
from resonite_records.services.records import RecordStoreService

_logger = logging.getLogger(__name__)


def oldest_first(records: list[Record]) -> list[Record]:
    """Stable ascending sort by modification time."""
    return sorted(records, key=lambda record: record.last_modification_time)


def select_deletion_candidates(records: list[Record]) -> list[Record]:
    """Return every record except the most recently modified one.

    Records sharing the newest timestamp are ordered by input position, so
    the later of them is the one kept. Fewer than two records yields nothing.
    """
    return oldest_first(records)[:-1]


@dataclass(frozen=True)
class RetentionGroup:
    """A single logical record identified by name and path."""

    name: str
    path: str


@dataclass(frozen=True)
class RetentionPlan:
    """Versions of a group, oldest first, split into kept and candidates."""

    group: RetentionGroup
    records: list[Record]
    candidates: list[Record]

    @property
    def kept(self) -> Record | None:
        """Return the record that survives the policy."""
        return self.records[-1] if self.records else None


@dataclass
class RetentionService:
    """Plans and applies the keep-newest policy for a record group."""

    query_service: QueryService
    record_store: RecordStoreService

    async def plan(self, session: Session, group: RetentionGroup) -> RetentionPlan:
        """Fetch the group's versions and select the deletion candidates."""
        records = await self.query_service.by_name_and_path(
            session, group.name, group.path
        )
        ordered = oldest_first(records)
        candidates = select_deletion_candidates(ordered)
        _logger.info(
            "Retention plan for %s at %s: %s record(s), %s candidate(s)",
            group.name,
            group.path,
            len(ordered),
            len(candidates),
        )
        return RetentionPlan(group=group, records=ordered, candidates=candidates)

    async def apply(self, session: Session, plan: RetentionPlan) -> DeletionReport:
        """Delete the plan's candidates."""
        return await self.record_store.delete_many(session, plan.candidates)
