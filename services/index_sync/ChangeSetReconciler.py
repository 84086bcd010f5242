"""Reconciliation of a change notification against the current store state.

Ids declared created or updated that do not come back visible from the store
(deleted out-of-band, unpublished, of an unmanaged type, or hidden by the
classifier) are scheduled for deletion. This removes stale records when a
document's visibility flips from true to false.
"""

from services.index_sync.RecordTransformer import RecordTransformer
from services.index_sync.VisibilityClassifier import VisibilityClassifier
from services.index_sync.errors import FetchFailure
from shared.clients.index.models.TypeIndexMap import TypeIndexMap
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.models.document import Document
from shared.models.sync import ChangeNotification, ChangeSet


def _unique(ids: list[str]) -> list[str]:
    """Deduplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


class ChangeSetReconciler:
    def __init__(
        self,
        store_client: StoreClientInterface,
        type_index_map: TypeIndexMap,
        classifier: VisibilityClassifier,
        transformer: RecordTransformer,
    ) -> None:
        self._store = store_client
        self._type_index_map = type_index_map
        self._classifier = classifier
        self._transformer = transformer

    async def reconcile(self, notification: ChangeNotification) -> ChangeSet:
        """Compute the records to save and the ids to delete for a notification.

        An id listed in ``deleted`` always wins: it is never saved, even when
        the store still returns it as visible.

        Raises:
            FetchFailure: If the store query fails.
            ClassifierFailure: If the visibility predicate raises.
            SerializationFailure: If the serializer raises.
        """
        ids = notification.ids
        requested_ids = _unique(ids.created + ids.updated)
        deleted_ids = _unique(ids.deleted)

        documents = await self._fetch(requested_ids)
        visible_documents = self._classifier.filter_visible(documents)

        visible_ids = {document.id for document in visible_documents}
        hidden_ids = [doc_id for doc_id in requested_ids if doc_id not in visible_ids]

        deleted_set = set(deleted_ids)
        to_save = self._transformer.transform(
            [document for document in visible_documents if document.id not in deleted_set]
        )
        to_delete = _unique(deleted_ids + hidden_ids)
        return ChangeSet(to_save=to_save, to_delete=to_delete)

    async def _fetch(self, requested_ids: list[str]) -> list[Document]:
        if not requested_ids:
            return []
        try:
            return await self._store.do_fetch_documents_by_ids_and_types(
                requested_ids, self._type_index_map.get_types()
            )
        except Exception as exc:
            raise FetchFailure(f"Fetching {len(requested_ids)} document(s) from the store failed: {exc}") from exc
