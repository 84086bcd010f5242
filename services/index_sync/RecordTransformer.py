from services.index_sync.SyncStrategy import SyncStrategy
from services.index_sync.baseline import standard_values
from services.index_sync.errors import SerializationFailure
from shared.models.document import Document, IndexRecord


class RecordTransformer:
    """Turns documents into index records: baseline fields overridden by the strategy's serializer."""

    def __init__(self, strategy: SyncStrategy) -> None:
        self._strategy = strategy

    def transform(self, documents: list[Document]) -> list[IndexRecord]:
        """Transform documents into records, one per document, in input order.

        Raises:
            SerializationFailure: If the serializer raises, returns something
                other than a dict, or changes the record's id or type.
        """
        return [self.transform_document(document) for document in documents]

    def transform_document(self, document: Document) -> IndexRecord:
        try:
            serialized = self._strategy.serialize(document)
        except Exception as exc:
            raise SerializationFailure(document.id, str(exc)) from exc
        if not isinstance(serialized, dict):
            raise SerializationFailure(document.id, f"serializer returned {type(serialized).__name__}, expected dict")

        fields = {**standard_values(document), **serialized}
        # id and type route the record, they always mirror the document
        if fields["id"] != document.id or fields["type"] != document.type:
            raise SerializationFailure(document.id, "serializer must not change the record id or type")
        try:
            return IndexRecord(**fields)
        except Exception as exc:
            raise SerializationFailure(document.id, str(exc)) from exc
