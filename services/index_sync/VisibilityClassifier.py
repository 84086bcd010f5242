from services.index_sync.SyncStrategy import SyncStrategy
from services.index_sync.errors import ClassifierFailure
from shared.models.document import Document


class VisibilityClassifier:
    """Applies a strategy's visibility predicate to fetched documents."""

    def __init__(self, strategy: SyncStrategy) -> None:
        self._strategy = strategy

    def is_visible(self, document: Document) -> bool:
        """Return True if the document should exist in the index set.

        Raises:
            ClassifierFailure: If the predicate raises.
        """
        try:
            return bool(self._strategy.classify(document))
        except Exception as exc:
            raise ClassifierFailure(document.id, str(exc)) from exc

    def filter_visible(self, documents: list[Document]) -> list[Document]:
        """Return the visible documents, in input order."""
        return [document for document in documents if self.is_visible(document)]
