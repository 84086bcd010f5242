"""Synchronisation service.

Keeps the per-type search indices in line with the document store. A webhook
sync resolves the ids of a change notification against the store, saves the
records of visible documents to the index of their type and removes every
other declared id from all indices. A full sync re-indexes every document of
the configured types.
"""

from services.index_sync.ChangeSetReconciler import ChangeSetReconciler
from services.index_sync.IndexDispatcher import IndexDispatcher
from services.index_sync.RecordTransformer import RecordTransformer
from services.index_sync.SyncStrategy import SyncStrategy
from services.index_sync.VisibilityClassifier import VisibilityClassifier
from services.index_sync.errors import FetchFailure, SyncError
from shared.clients.index.models.TypeIndexMap import TypeIndexMap
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document, IndexRecord
from shared.models.sync import ChangeNotification, ChangeSet


class SyncService:
    """Orchestrates synchronisation runs from the document store to the search indices."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        type_index_map: TypeIndexMap,
        strategy: SyncStrategy,
    ) -> None:
        self.logging = helper_config.get_logger()
        strategy.validate_types(type_index_map.get_types())

        self._store = store_client
        self._type_index_map = type_index_map
        self._classifier = VisibilityClassifier(strategy)
        self._transformer = RecordTransformer(strategy)
        self._reconciler = ChangeSetReconciler(store_client, type_index_map, self._classifier, self._transformer)
        self._dispatcher = IndexDispatcher(type_index_map)

    ##########################################
    ############### CORE SYNC ################
    ##########################################

    def transform(self, documents: list[Document]) -> list[IndexRecord]:
        """Transform documents into index records without touching any index."""
        return self._transformer.transform(documents)

    async def do_webhook_sync(self, notification: ChangeNotification) -> ChangeSet:
        """Apply one change notification to the indices.

        Args:
            notification (ChangeNotification): The created/updated/deleted ids.

        Returns:
            ChangeSet: The writes that were applied.

        Raises:
            SyncError: If fetching, classification, serialization or an index write fails.
        """
        ids = notification.ids
        self.logging.info(
            "Webhook sync: %d created, %d updated, %d deleted.",
            len(ids.created), len(ids.updated), len(ids.deleted),
        )
        try:
            change_set = await self._reconciler.reconcile(notification)
            await self._dispatcher.dispatch(change_set)
        except SyncError as exc:
            self.logging.error("Webhook sync failed: %s", exc)
            raise

        self.logging.info(
            "Webhook sync complete: %d record(s) saved, %d id(s) deleted from %d index(es).",
            len(change_set.to_save), len(change_set.to_delete), len(self._type_index_map),
        )
        return change_set

    async def do_full_sync(self) -> ChangeSet:
        """Re-index every visible document of the configured types.

        Hidden documents found in the store are deleted from every index.
        Records of documents removed from the store are left untouched, since
        the indices are never enumerated.

        Returns:
            ChangeSet: The writes that were applied.

        Raises:
            SyncError: If fetching, classification, serialization or an index write fails.
        """
        types = self._type_index_map.get_types()
        self.logging.info("Starting full sync for type(s): %s", ", ".join(types))
        try:
            try:
                documents = await self._store.do_fetch_documents_by_types(types)
            except Exception as exc:
                raise FetchFailure(f"Fetching all documents from the store failed: {exc}") from exc

            visible_documents = self._classifier.filter_visible(documents)
            visible_ids = {document.id for document in visible_documents}
            change_set = ChangeSet(
                to_save=self._transformer.transform(visible_documents),
                to_delete=[document.id for document in documents if document.id not in visible_ids],
            )
            await self._dispatcher.dispatch(change_set)
        except SyncError as exc:
            self.logging.error("Full sync failed: %s", exc)
            raise

        self.logging.info(
            "Full sync complete: %d of %d document(s) indexed, %d hidden removed.",
            len(change_set.to_save), len(documents), len(change_set.to_delete),
        )
        return change_set
