"""Pydantic models for the documents flowing through a synchronisation run.

Hierarchy:
  Document     — a document as fetched from the document store (open field set).
  IndexRecord  — the unit written to a search index, one per visible document.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A fetched document — backend-independent.

    The store's system fields (``_id``, ``_type``, ``_rev``) are exposed as
    ``id``, ``type`` and ``rev``. Every other field of the source document is
    kept untouched in ``model_extra`` so serializers can read arbitrary
    type-specific content.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    type: str = Field(alias="_type")
    rev: str | None = Field(default=None, alias="_rev")

    def get_field(self, name: str, default: Any = None) -> Any:
        """Return a type-specific field of the document, or ``default`` if absent."""
        return (self.model_extra or {}).get(name, default)

    def get_fields(self) -> dict[str, Any]:
        """Return all type-specific fields of the document."""
        return dict(self.model_extra or {})


class IndexRecord(BaseModel):
    """A record as stored in a search index.

    ``id`` always mirrors the source document id, ``type`` selects the
    destination index. Baseline and serializer fields are stored as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    rev: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the record as a plain JSON-serialisable dict."""
        return self.model_dump(mode="json")
