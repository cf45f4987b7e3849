"""Record queries: predicate variants and the services that apply them.

Queries are immutable values evaluated by ``matches``. They hold no state and
can be reused or nested inside ``AllOf`` freely.
"""

from collections import Counter
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from resonite_records.domain.records import Record
from resonite_records.domain.session import Session
from resonite_records.services.records import RecordStoreService

MESSAGE_ITEM_TAG = "message_item"
VOICE_TAG = "voice"
MESSAGE_TAG = "message"


@dataclass(frozen=True)
class NameEquals:
    """Record name equals ``name`` exactly."""

    name: str


@dataclass(frozen=True)
class PathEquals:
    """Record path equals ``path`` exactly."""

    path: str


@dataclass(frozen=True)
class TagContains:
    """Record is tagged with ``tag``."""

    tag: str


@dataclass(frozen=True)
class AnyTag:
    """Record carries at least one of ``tags``."""

    tags: frozenset[str]


@dataclass(frozen=True)
class AllTags:
    """Record carries every one of ``tags``."""

    tags: frozenset[str]


@dataclass(frozen=True)
class AllOf:
    """Every nested query matches."""

    queries: tuple["Query", ...]


@dataclass(frozen=True)
class MessageItemPolicy:
    """Standalone message items, excluding combined voice+message bundles."""


Query = (
    NameEquals | PathEquals | TagContains | AnyTag | AllTags | AllOf | MessageItemPolicy
)


def matches(query: Query, record: Record) -> bool:  # noqa: PLR0911
    """Return True when ``record`` satisfies ``query``."""
    if isinstance(query, NameEquals):
        return record.name == query.name
    if isinstance(query, PathEquals):
        return record.path == query.path
    if isinstance(query, TagContains):
        return query.tag in record.tags
    if isinstance(query, AnyTag):
        return not query.tags.isdisjoint(record.tags)
    if isinstance(query, AllTags):
        return query.tags.issubset(record.tags)
    if isinstance(query, AllOf):
        return all(matches(nested, record) for nested in query.queries)
    if isinstance(query, MessageItemPolicy):
        return matches(TagContains(MESSAGE_ITEM_TAG), record) and not matches(
            AllTags(frozenset({VOICE_TAG, MESSAGE_TAG})), record
        )
    raise TypeError(f"Unsupported query: {query!r}")


def filter_records(records: Iterable[Record], query: Query) -> list[Record]:
    """Return the records matching ``query``, preserving order."""
    return [record for record in records if matches(query, record)]


def intersect_by_id(left: list[Record], right: list[Record]) -> list[Record]:
    """Return records of ``left`` whose id also appears in ``right``."""
    right_ids = {record.id for record in right}
    return [record for record in left if record.id in right_ids]


def newest_first(records: list[Record]) -> list[Record]:
    """Order records by modification time, most recent first."""
    return sorted(
        records, key=lambda record: record.last_modification_time, reverse=True
    )


def summarize_by_name(records: Iterable[Record]) -> list[tuple[str, int]]:
    """Return (name, count) pairs ordered by name."""
    return sorted(Counter(record.name for record in records).items())


def _tag_set(tags: Collection[str]) -> frozenset[str]:
    # A bare string would otherwise become a set of its characters.
    if isinstance(tags, str):
        raise TypeError("tags must be a collection of tag names, not a single string")
    return frozenset(tags)


@dataclass
class QueryService:
    """Builds filtered record subsets from the full record set."""

    record_store: RecordStoreService

    async def by_filter(self, session: Session, query: Query) -> list[Record]:
        """Fetch all records and return those matching ``query``."""
        return filter_records(await self.record_store.fetch_all(session), query)

    async def by_name(self, session: Session, name: str) -> list[Record]:
        """Return records named exactly ``name``."""
        return await self.by_filter(session, NameEquals(name))

    async def by_path(self, session: Session, path: str) -> list[Record]:
        """Return records located exactly at ``path``."""
        return await self.by_filter(session, PathEquals(path))

    async def by_name_and_path(
        self, session: Session, name: str, path: str
    ) -> list[Record]:
        """Return records matching both ``name`` and ``path``."""
        return await self.by_filter(
            session, AllOf((NameEquals(name), PathEquals(path)))
        )

    async def by_tag(self, session: Session, tag: str) -> list[Record]:
        """Return records tagged with ``tag``."""
        return await self.by_filter(session, TagContains(tag))

    async def by_any_tag(self, session: Session, tags: Collection[str]) -> list[Record]:
        """Return records tagged with at least one of ``tags``."""
        return await self.by_filter(session, AnyTag(_tag_set(tags)))

    async def by_all_tags(self, session: Session, tags: Collection[str]) -> list[Record]:
        """Return records tagged with all of ``tags``."""
        return await self.by_filter(session, AllTags(_tag_set(tags)))

    async def message_items(self, session: Session) -> list[Record]:
        """Return message item records, excluding voice+message bundles."""
        return await self.by_filter(session, MessageItemPolicy())

    async def by_name_and_tag(
        self, session: Session, name: str, tag: str
    ) -> list[Record]:
        """Return records present in both the name and the tag results.

        Each criterion is fetched and filtered on its own; the results are
        intersected by record id.
        """
        name_results = await self.by_name(session, name)
        tag_results = await self.by_tag(session, tag)
        return intersect_by_id(name_results, tag_results)

    async def search(
        self, session: Session, name: str | None, tag: str | None
    ) -> list[Record]:
        """Search by name and/or tag, newest records first."""
        if name and tag:
            results = await self.by_name_and_tag(session, name, tag)
        elif name:
            results = await self.by_name(session, name)
        elif tag:
            results = await self.by_tag(session, tag)
        else:
            raise ValueError("At least one of name or tag is required")
        return newest_first(results)
