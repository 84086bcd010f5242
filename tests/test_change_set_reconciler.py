"""Tests for the change set reconciler (visibility diff between declared and visible ids)."""

import pytest

from services.index_sync.ChangeSetReconciler import ChangeSetReconciler
from services.index_sync.RecordTransformer import RecordTransformer
from services.index_sync.SyncStrategy import CallableSyncStrategy
from services.index_sync.VisibilityClassifier import VisibilityClassifier
from services.index_sync.errors import ClassifierFailure, FetchFailure, SerializationFailure
from shared.models.sync import ChangeNotification

from conftest import make_doc


def _notification(created=(), updated=(), deleted=()):
    return ChangeNotification.model_validate(
        {"ids": {"created": list(created), "updated": list(updated), "deleted": list(deleted)}}
    )


def _reconciler(store_client, type_index_map, visible=None, serializer=None):
    strategy = CallableSyncStrategy(
        serializer or (lambda d: {"title": d.get_field("title")}),
        supported_types=type_index_map.get_types(),
        visible=visible,
    )
    return ChangeSetReconciler(
        store_client, type_index_map, VisibilityClassifier(strategy), RecordTransformer(strategy)
    )


@pytest.mark.asyncio
async def test_default_visibility_saves_every_fetched_document(store_client, type_index_map):
    store_client.documents = [make_doc("a"), make_doc("b", "page")]

    change_set = await _reconciler(store_client, type_index_map).reconcile(_notification(created=["a", "b"]))

    assert [r.id for r in change_set.to_save] == ["a", "b"]
    assert change_set.to_delete == []


@pytest.mark.asyncio
async def test_visibility_flip_removes_stale_record(store_client, type_index_map):
    store_client.documents = [make_doc("x")]
    reconciler = _reconciler(store_client, type_index_map, visible=lambda d: False)

    change_set = await reconciler.reconcile(_notification(updated=["x"]))

    assert change_set.to_save == []
    assert change_set.to_delete == ["x"]


@pytest.mark.asyncio
async def test_ids_missing_from_store_are_deleted(store_client, type_index_map):
    store_client.documents = [make_doc("a"), make_doc("unmanaged", "author")]

    change_set = await _reconciler(store_client, type_index_map).reconcile(
        _notification(created=["a", "gone"], updated=["unmanaged"])
    )

    assert [r.id for r in change_set.to_save] == ["a"]
    assert change_set.to_delete == ["gone", "unmanaged"]


@pytest.mark.asyncio
async def test_explicit_and_hidden_deletes_are_merged(store_client, type_index_map):
    store_client.documents = [make_doc("a", hidden=True), make_doc("b")]
    reconciler = _reconciler(store_client, type_index_map, visible=lambda d: not d.get_field("hidden"))

    change_set = await reconciler.reconcile(_notification(created=["a"], updated=["b"], deleted=["z", "z"]))

    assert [r.id for r in change_set.to_save] == ["b"]
    assert change_set.to_delete == ["z", "a"]


@pytest.mark.asyncio
async def test_fetch_is_restricted_to_registered_types_and_deduplicated(store_client, type_index_map):
    store_client.documents = [make_doc("a")]

    await _reconciler(store_client, type_index_map).reconcile(_notification(created=["a"], updated=["a", "b"]))

    store_client.do_fetch_documents_by_ids_and_types.assert_awaited_once_with(["a", "b"], ["post", "page"])


@pytest.mark.asyncio
async def test_id_in_both_created_and_updated_is_saved_once(store_client, type_index_map):
    store_client.documents = [make_doc("a")]

    change_set = await _reconciler(store_client, type_index_map).reconcile(_notification(created=["a"], updated=["a"]))

    assert [r.id for r in change_set.to_save] == ["a"]


@pytest.mark.asyncio
async def test_deleted_wins_over_updated(store_client, type_index_map):
    store_client.documents = [make_doc("a"), make_doc("b")]

    change_set = await _reconciler(store_client, type_index_map).reconcile(
        _notification(updated=["a", "b"], deleted=["a"])
    )

    assert [r.id for r in change_set.to_save] == ["b"]
    assert change_set.to_delete == ["a"]


@pytest.mark.asyncio
async def test_saved_ids_never_in_delete_set(store_client, type_index_map):
    store_client.documents = [make_doc(i) for i in "abcdef"]
    reconciler = _reconciler(store_client, type_index_map, visible=lambda d: d.id in "ace")

    change_set = await reconciler.reconcile(_notification(created=list("abc"), updated=list("defg"), deleted=["c"]))

    saved = {r.id for r in change_set.to_save}
    assert saved == {"a", "e"}
    assert set(change_set.to_delete) == set("cbdfg")
    assert not saved & set(change_set.to_delete)


@pytest.mark.asyncio
async def test_empty_notification_is_a_noop(store_client, type_index_map):
    change_set = await _reconciler(store_client, type_index_map).reconcile(ChangeNotification())

    assert change_set.is_empty()
    store_client.do_fetch_documents_by_ids_and_types.assert_not_called()


@pytest.mark.asyncio
async def test_delete_only_notification_skips_fetch(store_client, type_index_map):
    change_set = await _reconciler(store_client, type_index_map).reconcile(_notification(deleted=["a"]))

    assert change_set.to_delete == ["a"]
    store_client.do_fetch_documents_by_ids_and_types.assert_not_called()


@pytest.mark.asyncio
async def test_reconcile_is_idempotent(store_client, type_index_map):
    store_client.documents = [make_doc("a", title="A"), make_doc("b", hidden=True)]
    reconciler = _reconciler(store_client, type_index_map, visible=lambda d: not d.get_field("hidden"))
    notification = _notification(created=["a"], updated=["b"], deleted=["c"])

    first = await reconciler.reconcile(notification)
    second = await reconciler.reconcile(notification)

    assert first == second


@pytest.mark.asyncio
async def test_store_failure_is_fetch_failure(store_client, type_index_map):
    store_client.do_fetch_documents_by_ids_and_types.side_effect = RuntimeError("connection refused")

    with pytest.raises(FetchFailure, match="connection refused"):
        await _reconciler(store_client, type_index_map).reconcile(_notification(created=["a"]))


@pytest.mark.asyncio
async def test_raising_predicate_is_classifier_failure(store_client, type_index_map):
    store_client.documents = [make_doc("a")]

    def visible(document):
        raise AttributeError("isHidden")

    with pytest.raises(ClassifierFailure):
        await _reconciler(store_client, type_index_map, visible=visible).reconcile(_notification(created=["a"]))


@pytest.mark.asyncio
async def test_raising_serializer_is_serialization_failure(store_client, type_index_map):
    store_client.documents = [make_doc("a")]

    def serializer(document):
        raise ValueError("unhandled type")

    with pytest.raises(SerializationFailure):
        await _reconciler(store_client, type_index_map, serializer=serializer).reconcile(_notification(created=["a"]))
