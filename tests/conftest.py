"""Shared fixtures for the content index bridge tests."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.clients.index.models.TypeIndexMap import TypeIndexMap
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger
from shared.models.document import Document


def make_doc(doc_id: str, doc_type: str = "post", **fields) -> Document:
    """Build a fetched document the way the store returns it."""
    return Document.model_validate({"_id": doc_id, "_type": doc_type, "_rev": f"rev-{doc_id}", **fields})


def make_index_client(index_name: str) -> MagicMock:
    """Mock index handle with async save/delete calls."""
    client = MagicMock()
    client.get_index_name.return_value = index_name
    client.do_save_objects = AsyncMock(return_value=None)
    client.do_delete_objects = AsyncMock(return_value=None)
    return client


@pytest.fixture
def helper_config():
    """HelperConfig wired to a quiet test logger."""
    return HelperConfig(logger=ColorLogger(logging.getLogger("content_index_bridge.tests")))


@pytest.fixture
def post_index():
    return make_index_client("posts")


@pytest.fixture
def page_index():
    return make_index_client("pages")


@pytest.fixture
def type_index_map(post_index, page_index):
    """TypeIndexMap with the two registered types post and page."""
    return TypeIndexMap({"post": post_index, "page": page_index})


@pytest.fixture
def store_client():
    """Mock store returning whatever documents a test assigns to `documents`."""
    store = MagicMock()
    store.documents = []

    async def fetch(ids, types):
        return [doc for doc in store.documents if doc.id in ids and doc.type in types]

    store.do_fetch_documents_by_ids_and_types = AsyncMock(side_effect=fetch)
    store.do_fetch_documents_by_types = AsyncMock(
        side_effect=lambda types: [doc for doc in store.documents if doc.type in types]
    )
    return store
