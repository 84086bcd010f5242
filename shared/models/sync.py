"""Pydantic models for change notifications and reconciliation results."""

from pydantic import BaseModel, Field

from shared.models.document import IndexRecord


class ChangeIds(BaseModel):
    """The three id lists of a change notification. Missing lists are empty."""

    created: list[str] = []
    updated: list[str] = []
    deleted: list[str] = []


class ChangeNotification(BaseModel):
    """Inbound change notification, e.g. the body of a content-lake webhook.

    Example::

        {"ids": {"created": ["a"], "updated": [], "deleted": ["b"]}}
    """

    ids: ChangeIds = Field(default_factory=ChangeIds)


class ChangeSet(BaseModel):
    """The writes a synchronisation run resolved to.

    Attributes:
        to_save:   Records to upsert, each routed to the index of its type.
        to_delete: Ids to remove from every index. Never overlaps ``to_save``.
    """

    to_save: list[IndexRecord] = []
    to_delete: list[str] = []

    def is_empty(self) -> bool:
        return not self.to_save and not self.to_delete
