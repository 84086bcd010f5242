"""Tests for the pluggable sync strategies."""

from unittest.mock import patch

import pytest

from services.index_sync.DefaultSyncStrategy import DefaultSyncStrategy
from services.index_sync.SyncStrategy import CallableSyncStrategy

from conftest import make_doc


def test_callable_strategy_defaults_to_visible():
    strategy = CallableSyncStrategy(lambda d: {}, supported_types={"post"})

    assert strategy.classify(make_doc("a")) is True


def test_callable_strategy_uses_predicate_and_serializer():
    strategy = CallableSyncStrategy(
        lambda d: {"title": d.get_field("title")},
        supported_types=["post"],
        visible=lambda d: not d.get_field("isHidden"),
    )

    assert strategy.classify(make_doc("a", isHidden=True)) is False
    assert strategy.serialize(make_doc("b", title="B")) == {"title": "B"}


def test_validate_types_rejects_uncovered_types():
    strategy = CallableSyncStrategy(lambda d: {}, supported_types={"post"})

    strategy.validate_types(["post"])
    with pytest.raises(ValueError, match="page"):
        strategy.validate_types(["post", "page"])


@pytest.fixture
def default_strategy(helper_config):
    with patch.dict("os.environ", {
        "SYNC_HIDDEN_FIELD": "isHidden",
        "SYNC_FIELDS": "[title,slug]",
        "SYNC_TEXT_FIELDS": "[body]",
    }):
        return DefaultSyncStrategy(helper_config, ["post", "page"])


def test_default_strategy_hides_drafts_and_hidden_documents(default_strategy):
    assert default_strategy.classify(make_doc("a")) is True
    assert default_strategy.classify(make_doc("drafts.a")) is False
    assert default_strategy.classify(make_doc("b", isHidden=True)) is False
    assert default_strategy.classify(make_doc("c", isHidden=False)) is True


def test_default_strategy_serializes_configured_fields(default_strategy):
    doc = make_doc(
        "a",
        title="Title",
        slug={"_type": "slug", "current": "title"},
        body=[{"_type": "block", "children": [{"_type": "span", "text": "Body text"}]}],
        internal="not copied",
    )

    assert default_strategy.serialize(doc) == {"title": "Title", "slug": "title", "body": "Body text"}


def test_default_strategy_skips_missing_fields(default_strategy):
    assert default_strategy.serialize(make_doc("a")) == {}


def test_default_strategy_supports_configured_types(default_strategy):
    assert default_strategy.get_supported_types() == {"post", "page"}
