"""Tests for routing saves by type and broadcasting deletes."""

import pytest

from services.index_sync.IndexDispatcher import IndexDispatcher
from services.index_sync.errors import IndexWriteFailure
from shared.models.document import IndexRecord
from shared.models.sync import ChangeSet


def _record(record_id: str, record_type: str) -> IndexRecord:
    return IndexRecord(id=record_id, type=record_type, title=record_id.upper())


@pytest.mark.asyncio
async def test_saves_are_routed_by_type(type_index_map, post_index, page_index):
    post, page = _record("p1", "post"), _record("g1", "page")

    await IndexDispatcher(type_index_map).dispatch(ChangeSet(to_save=[post, page]))

    post_index.do_save_objects.assert_awaited_once_with([post])
    page_index.do_save_objects.assert_awaited_once_with([page])
    post_index.do_delete_objects.assert_not_called()
    page_index.do_delete_objects.assert_not_called()


@pytest.mark.asyncio
async def test_types_without_records_get_no_save_call(type_index_map, post_index, page_index):
    records = [_record("p1", "post"), _record("p2", "post")]

    await IndexDispatcher(type_index_map).dispatch(ChangeSet(to_save=records))

    post_index.do_save_objects.assert_awaited_once_with(records)
    page_index.do_save_objects.assert_not_called()


@pytest.mark.asyncio
async def test_deletes_are_broadcast_to_every_index(type_index_map, post_index, page_index):
    await IndexDispatcher(type_index_map).dispatch(ChangeSet(to_delete=["z"]))

    post_index.do_delete_objects.assert_awaited_once_with(["z"])
    page_index.do_delete_objects.assert_awaited_once_with(["z"])
    post_index.do_save_objects.assert_not_called()
    page_index.do_save_objects.assert_not_called()


@pytest.mark.asyncio
async def test_empty_change_set_makes_no_calls(type_index_map, post_index, page_index):
    await IndexDispatcher(type_index_map).dispatch(ChangeSet())

    for index in (post_index, page_index):
        index.do_save_objects.assert_not_called()
        index.do_delete_objects.assert_not_called()


@pytest.mark.asyncio
async def test_saves_complete_before_deletes(type_index_map, post_index, page_index):
    calls = []
    post_index.do_save_objects.side_effect = lambda records: calls.append("save:posts")
    page_index.do_save_objects.side_effect = lambda records: calls.append("save:pages")
    post_index.do_delete_objects.side_effect = lambda ids: calls.append("delete:posts")
    page_index.do_delete_objects.side_effect = lambda ids: calls.append("delete:pages")

    await IndexDispatcher(type_index_map).dispatch(
        ChangeSet(to_save=[_record("p1", "post"), _record("g1", "page")], to_delete=["z"])
    )

    assert sorted(calls[:2]) == ["save:pages", "save:posts"]
    assert sorted(calls[2:]) == ["delete:pages", "delete:posts"]


@pytest.mark.asyncio
async def test_failed_save_is_index_write_failure_and_skips_deletes(type_index_map, post_index, page_index):
    post_index.do_save_objects.side_effect = RuntimeError("status 503")

    with pytest.raises(IndexWriteFailure) as excinfo:
        await IndexDispatcher(type_index_map).dispatch(
            ChangeSet(to_save=[_record("p1", "post"), _record("g1", "page")], to_delete=["z"])
        )

    assert excinfo.value.index_name == "posts"
    assert excinfo.value.operation == "save"
    # sibling save still ran, nothing is rolled back
    page_index.do_save_objects.assert_awaited_once()
    post_index.do_delete_objects.assert_not_called()
    page_index.do_delete_objects.assert_not_called()


@pytest.mark.asyncio
async def test_failed_delete_on_one_index_surfaces(type_index_map, post_index, page_index):
    page_index.do_delete_objects.side_effect = RuntimeError("forbidden")

    with pytest.raises(IndexWriteFailure, match="pages"):
        await IndexDispatcher(type_index_map).dispatch(ChangeSet(to_delete=["z"]))

    post_index.do_delete_objects.assert_awaited_once_with(["z"])


def test_partition_rejects_unregistered_type(type_index_map):
    with pytest.raises(IndexWriteFailure, match="author"):
        IndexDispatcher(type_index_map).partition([_record("a1", "author")])


def test_partition_keeps_record_order(type_index_map):
    records = [_record("p1", "post"), _record("g1", "page"), _record("p2", "post")]

    partitions = IndexDispatcher(type_index_map).partition(records)

    assert [r.id for r in partitions["post"]] == ["p1", "p2"]
    assert [r.id for r in partitions["page"]] == ["g1"]
