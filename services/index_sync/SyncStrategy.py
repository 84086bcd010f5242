"""Pluggable per-deployment behaviour of a synchronisation run.

A SyncStrategy bundles the visibility predicate and the serializer so both
can be validated against the configured document types at construction.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable

from shared.models.document import Document

SerializeFunction = Callable[[Document], dict[str, Any]]
VisibilityFunction = Callable[[Document], bool]


class SyncStrategy(ABC):
    """Decides which documents are searchable and what their records contain."""

    def classify(self, document: Document) -> bool:
        """Return True if the document should exist in the index set.

        Must be deterministic and free of side effects. Every document is
        visible by default.
        """
        return True

    @abstractmethod
    def serialize(self, document: Document) -> dict[str, Any]:
        """Return the type-specific fields of the document's index record.

        Returned keys override the baseline fields of the record.
        """
        pass

    @abstractmethod
    def get_supported_types(self) -> set[str]:
        """Return the document types ``serialize`` can handle."""
        pass

    def validate_types(self, types: Iterable[str]) -> None:
        """Check that the strategy covers every given document type.

        Raises:
            ValueError: If at least one type is not supported.
        """
        missing = sorted(set(types) - self.get_supported_types())
        if missing:
            raise ValueError(
                f"{type(self).__name__} does not support the configured document type(s): {', '.join(missing)}"
            )


class CallableSyncStrategy(SyncStrategy):
    """Strategy assembled from a plain serializer function and an optional visibility predicate.

    Usage::

        def serialize(document):
            if document.type == "post":
                return {"title": document.get_field("title")}
            return {"heading": document.get_field("heading")}

        strategy = CallableSyncStrategy(serialize, supported_types={"post", "page"},
                                        visible=lambda d: not d.get_field("isHidden"))
    """

    def __init__(
        self,
        serializer: SerializeFunction,
        supported_types: Iterable[str],
        visible: VisibilityFunction | None = None,
    ) -> None:
        self._serializer = serializer
        self._supported_types = set(supported_types)
        self._visible = visible

    def classify(self, document: Document) -> bool:
        return self._visible(document) if self._visible else True

    def serialize(self, document: Document) -> dict[str, Any]:
        return self._serializer(document)

    def get_supported_types(self) -> set[str]:
        return set(self._supported_types)
