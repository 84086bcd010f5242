"""Configuration-driven strategy used by the API server and the sync runner."""

from typing import Any

from services.index_sync.SyncStrategy import SyncStrategy
from services.index_sync.baseline import flatten_blocks
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document

DRAFT_PREFIX = "drafts."


class DefaultSyncStrategy(SyncStrategy):
    """Generic strategy for content documents.

    - drafts (ids prefixed with ``drafts.``) are never searchable
    - SYNC_HIDDEN_FIELD names a boolean field hiding a document when truthy
    - SYNC_FIELDS lists fields copied verbatim into the record
    - SYNC_TEXT_FIELDS lists portable-text fields flattened to plain text
    - a listed ``slug`` object is reduced to its ``current`` value
    """

    def __init__(self, helper_config: HelperConfig, types: list[str]) -> None:
        self.logging = helper_config.get_logger()
        self._types = set(types)
        self._hidden_field = helper_config.get_string_val("SYNC_HIDDEN_FIELD", default="")
        self._fields = helper_config.get_list_val("SYNC_FIELDS", default=["title"])
        self._text_fields = helper_config.get_list_val("SYNC_TEXT_FIELDS", default=["body"])

    def classify(self, document: Document) -> bool:
        if document.id.startswith(DRAFT_PREFIX):
            return False
        if self._hidden_field and document.get_field(self._hidden_field):
            return False
        return True

    def serialize(self, document: Document) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for field in self._fields:
            value = document.get_field(field)
            if field == "slug" and isinstance(value, dict):
                value = value.get("current")
            if value is not None:
                record[field] = value
        for field in self._text_fields:
            blocks = document.get_field(field)
            if isinstance(blocks, list):
                record[field] = flatten_blocks(blocks)
        return record

    def get_supported_types(self) -> set[str]:
        return set(self._types)
