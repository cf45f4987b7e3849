"""Tests for record queries."""

import asyncio

import pytest

from resonite_records.services.queries import (
    AllOf,
    AllTags,
    AnyTag,
    MessageItemPolicy,
    NameEquals,
    PathEquals,
    QueryService,
    TagContains,
    filter_records,
    intersect_by_id,
    matches,
    summarize_by_name,
)
from resonite_records.services.records import RecordStoreService
from tests.conftest import FakeResoniteClient, make_record


def _service(records) -> tuple[QueryService, FakeResoniteClient]:  # type: ignore[no-untyped-def]
    client = FakeResoniteClient(records=list(records))
    return QueryService(RecordStoreService(client)), client


def test_message_item_policy_cases() -> None:
    policy = MessageItemPolicy()

    assert matches(policy, make_record("R-1", tags=("message_item",)))
    assert not matches(
        policy, make_record("R-2", tags=("message_item", "voice", "message"))
    )
    assert matches(policy, make_record("R-3", tags=("message_item", "voice")))
    assert matches(policy, make_record("R-4", tags=("message", "message_item")))
    assert not matches(policy, make_record("R-5", tags=("voice", "message")))


def test_exact_name_and_path_predicates() -> None:
    record = make_record("R-1", name="Screens", path="Workspaces\\Private")

    assert matches(NameEquals("Screens"), record)
    assert not matches(NameEquals("screens"), record)
    assert matches(PathEquals("Workspaces\\Private"), record)
    assert not matches(PathEquals("Workspaces"), record)
    both = AllOf((NameEquals("Screens"), PathEquals("Workspaces\\Private")))
    assert matches(both, record)
    assert not matches(AllOf((NameEquals("Screens"), PathEquals("Other"))), record)


def test_tag_predicates() -> None:
    record = make_record("R-1", tags=("a", "b"))

    assert matches(TagContains("a"), record)
    assert not matches(TagContains("c"), record)
    assert matches(AnyTag(frozenset({"b", "c"})), record)
    assert not matches(AnyTag(frozenset({"c", "d"})), record)
    assert not matches(AnyTag(frozenset()), record)
    assert matches(AllTags(frozenset({"a", "b"})), record)
    assert not matches(AllTags(frozenset({"a", "c"})), record)
    assert matches(AllTags(frozenset()), record)


def test_unknown_query_is_rejected() -> None:
    with pytest.raises(TypeError):
        matches("name", make_record("R-1"))  # type: ignore[arg-type]


def test_filter_records_preserves_order() -> None:
    records = [
        make_record("R-3", name="x"),
        make_record("R-1", name="y"),
        make_record("R-2", name="x"),
    ]

    assert [r.id for r in filter_records(records, NameEquals("x"))] == ["R-3", "R-2"]


def test_intersection_is_by_identity() -> None:
    a, b, c, d = (make_record(f"R-{key}") for key in "ABCD")
    stale_c = make_record("R-C", name="renamed", minutes=5)

    result = intersect_by_id([a, b, c], [b, stale_c, d])

    assert [record.id for record in result] == ["R-B", "R-C"]


def test_by_name_and_tag_fetches_each_criterion_and_intersects(session) -> None:
    service, client = _service(
        [
            make_record("R-A", name="Note", tags=()),
            make_record("R-B", name="Note", tags=("keep",)),
            make_record("R-C", name="Note", tags=("keep", "x")),
            make_record("R-D", name="Other", tags=("keep",)),
        ]
    )

    result = asyncio.run(service.by_name_and_tag(session, "Note", "keep"))

    assert {record.id for record in result} == {"R-B", "R-C"}
    assert client.list_calls == 2


def test_by_name_and_tag_without_matches_is_empty(session) -> None:
    service, _ = _service([make_record("R-A", name="Note", tags=("keep",))])

    assert asyncio.run(service.by_name_and_tag(session, "Missing", "keep")) == []
    assert asyncio.run(service.by_name_and_tag(session, "Note", "missing")) == []


def test_query_service_single_criteria(session) -> None:
    service, _ = _service(
        [
            make_record("R-1", name="Screens", path="Dash", tags=("a",)),
            make_record("R-2", name="Screens", path="Other", tags=("a", "b")),
            make_record("R-3", name="Photo", path="Dash", tags=("c",)),
        ]
    )

    def ids(coro) -> list[str]:  # type: ignore[no-untyped-def]
        return [record.id for record in asyncio.run(coro)]

    assert ids(service.by_name(session, "Screens")) == ["R-1", "R-2"]
    assert ids(service.by_path(session, "Dash")) == ["R-1", "R-3"]
    assert ids(service.by_name_and_path(session, "Screens", "Dash")) == ["R-1"]
    assert ids(service.by_tag(session, "a")) == ["R-1", "R-2"]
    assert ids(service.by_any_tag(session, ["b", "c"])) == ["R-2", "R-3"]
    assert ids(service.by_all_tags(session, ["a", "b"])) == ["R-2"]


def test_tag_set_queries_reject_a_bare_string(session) -> None:
    service, client = _service([make_record("R-1", tags=("a",))])

    with pytest.raises(TypeError):
        asyncio.run(service.by_any_tag(session, "abc"))
    with pytest.raises(TypeError):
        asyncio.run(service.by_all_tags(session, "abc"))

    assert client.list_calls == 0


def test_message_items_query(session) -> None:
    service, _ = _service(
        [
            make_record("R-1", tags=("message_item",)),
            make_record("R-2", tags=("message_item", "voice", "message")),
            make_record("R-3", tags=("message_item", "voice")),
            make_record("R-4", tags=("photo",)),
        ]
    )

    result = asyncio.run(service.message_items(session))

    assert [record.id for record in result] == ["R-1", "R-3"]


def test_search_orders_newest_first(session) -> None:
    service, _ = _service(
        [
            make_record("R-old", name="Note", minutes=1),
            make_record("R-new", name="Note", minutes=10),
            make_record("R-mid", name="Note", minutes=5),
        ]
    )

    result = asyncio.run(service.search(session, "Note", None))

    assert [record.id for record in result] == ["R-new", "R-mid", "R-old"]


def test_search_by_tag_only_and_both(session) -> None:
    service, client = _service(
        [
            make_record("R-1", name="Note", tags=("keep",)),
            make_record("R-2", name="Other", tags=("keep",)),
        ]
    )

    assert len(asyncio.run(service.search(session, None, "keep"))) == 2
    assert client.list_calls == 1
    both = asyncio.run(service.search(session, "Note", "keep"))
    assert [record.id for record in both] == ["R-1"]


def test_search_requires_a_criterion(session) -> None:
    service, client = _service([])

    with pytest.raises(ValueError):
        asyncio.run(service.search(session, None, ""))
    assert client.list_calls == 0


def test_summarize_by_name_counts_sorted() -> None:
    records = [
        make_record("R-1", name="b"),
        make_record("R-2", name="a"),
        make_record("R-3", name="b"),
    ]

    assert summarize_by_name(records) == [("a", 1), ("b", 2)]
