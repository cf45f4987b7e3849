"""Interactive review state machine over an ordered record sequence."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from resonite_records.domain.records import Record
from resonite_records.domain.session import Session
from resonite_records.errors import TransportError
from resonite_records.services.records import RecordStoreService

_logger = logging.getLogger(__name__)


class ReviewState(Enum):
    """States of a review session."""

    PRESENTING = "presenting"
    AWAITING_DECISION = "awaiting_decision"
    COMPLETED = "completed"
    ABORTED = "aborted"


class ReviewDecision(Enum):
    """Operator decisions, keyed by their single-letter input."""

    DELETE = "D"
    SKIP = "S"
    EXIT = "E"


_TERMINAL_STATES = {ReviewState.COMPLETED, ReviewState.ABORTED}


def parse_decision(raw: str | None) -> ReviewDecision | None:
    """Parse a case-insensitive decision letter, or None if invalid."""
    cleaned = (raw or "").strip().upper()
    try:
        return ReviewDecision(cleaned)
    except ValueError:
        return None


@dataclass
class ReviewSession:
    """Progress of one review: position, state and counters."""

    records: list[Record]
    index: int = 0
    state: ReviewState = ReviewState.PRESENTING
    reviewed: int = 0
    deleted: int = 0
    skipped: int = 0
    failures: list[tuple[Record, TransportError]] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Return the number of records under review."""
        return len(self.records)

    @property
    def current(self) -> Record | None:
        """Return the record at the current position, if any."""
        if self.state in _TERMINAL_STATES or self.index >= len(self.records):
            return None
        return self.records[self.index]

    @property
    def finished(self) -> bool:
        """Return True once the review has completed or been aborted."""
        return self.state in _TERMINAL_STATES


@dataclass(frozen=True)
class ReviewStep:
    """Feedback for the operator after a decision."""

    text: str
    state: ReviewState


class ReviewConsole(Protocol):
    """Presentation interface used by the review loop."""

    def show_record(self, review: ReviewSession, record: Record) -> None:
        """Display the record awaiting a decision with review progress."""

    def read_decision(self) -> str | None:
        """Read the operator's raw decision input."""

    def show_step(self, step: ReviewStep) -> None:
        """Display the outcome of a decision."""

    def show_summary(self, review: ReviewSession) -> None:
        """Display final counts."""


@dataclass
class ReviewService:
    """Drives a review session, deleting records on the operator's request."""

    record_store: RecordStoreService

    def start(self, records: list[Record]) -> ReviewSession:
        """Create a review over ``records``; empty input completes at once."""
        review = ReviewSession(records=list(records))
        if not review.records:
            review.state = ReviewState.COMPLETED
        return review

    def present(self, review: ReviewSession) -> Record:
        """Move to awaiting a decision on the current record and return it."""
        record = review.current
        if record is None:
            raise RuntimeError(f"Review has no record to present ({review.state.value})")
        review.state = ReviewState.AWAITING_DECISION
        return record

    async def decide(
        self, session: Session, review: ReviewSession, raw: str | None
    ) -> ReviewStep:
        """Apply one operator decision to the record awaiting it."""
        if review.state is not ReviewState.AWAITING_DECISION:
            raise RuntimeError(f"Review is not awaiting a decision ({review.state.value})")
        record = review.records[review.index]
        decision = parse_decision(raw)
        if decision is None:
            return ReviewStep(
                text="Invalid option. Please choose D, S, or E.",
                state=review.state,
            )
        if decision is ReviewDecision.EXIT:
            review.state = ReviewState.ABORTED
            _logger.info(
                "Review exited at %s of %s", review.index + 1, review.total
            )
            return ReviewStep(text="Exiting to main menu...", state=review.state)
        if decision is ReviewDecision.SKIP:
            review.skipped += 1
            text = f"→ Skipped record: {record.name}"
        else:
            try:
                await self.record_store.delete(session, record)
            except TransportError as exc:
                review.failures.append((record, exc))
                text = f"✗ Failed to delete record: {exc}"
            else:
                review.deleted += 1
                text = f"✓ Successfully deleted record: {record.name}"
        review.reviewed += 1
        self._advance(review)
        return ReviewStep(text=text, state=review.state)

    async def run(
        self, session: Session, records: list[Record], console: ReviewConsole
    ) -> ReviewSession:
        """Walk ``records`` until every one is decided or the operator exits."""
        review = self.start(records)
        while not review.finished:
            if review.state is ReviewState.PRESENTING:
                self.present(review)
            console.show_record(review, review.records[review.index])
            step = await self.decide(session, review, console.read_decision())
            console.show_step(step)
        console.show_summary(review)
        return review

    @staticmethod
    def _advance(review: ReviewSession) -> None:
        review.index += 1
        if review.index >= len(review.records):
            review.state = ReviewState.COMPLETED
        else:
            review.state = ReviewState.PRESENTING
