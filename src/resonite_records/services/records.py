"""Record retrieval and deletion against the remote record store."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from resonite_records.adapters.resonite_client import ResoniteClient
from resonite_records.domain.records import DeletionReport, Record
from resonite_records.domain.session import Session
from resonite_records.errors import TransportError

_logger = logging.getLogger(__name__)


@dataclass
class RecordStoreService:
    """Application service for listing and deleting records."""

    client: ResoniteClient

    async def fetch_all(self, session: Session) -> list[Record]:
        """Return every record owned by the session's user."""
        records = await self.client.list_records(session)
        _logger.debug("Fetched %s records for %s", len(records), session.user_id)
        return records

    async def delete(self, session: Session, record: Record) -> None:
        """Delete a single record by id."""
        await self.client.delete_record(session, record.id)
        _logger.info("Deleted record %s (%s)", record.name, record.id)

    async def delete_many(
        self, session: Session, records: Sequence[Record]
    ) -> DeletionReport:
        """Delete records one at a time, in order, continuing past failures."""
        report = DeletionReport()
        for record in records:
            try:
                await self.delete(session, record)
            except TransportError as exc:
                _logger.warning("Failed to delete record %s: %s", record.id, exc)
                report.failed.append((record, exc))
                continue
            report.succeeded.append(record)
        if records:
            _logger.info(
                "Batch delete finished: %s succeeded, %s failed",
                len(report.succeeded),
                len(report.failed),
            )
        return report
