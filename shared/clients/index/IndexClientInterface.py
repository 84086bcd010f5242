from abc import abstractmethod

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import IndexRecord


class IndexClientInterface(ClientInterface):
    """Client of a single destination search index.

    One instance is created per index; the index name is fixed at construction.
    """

    def __init__(self, helper_config: HelperConfig, index_name: str):
        super().__init__(helper_config=helper_config)
        if not index_name or not index_name.strip():
            raise ValueError(f"No index name given for {self.get_client_type().upper()} client '{self.get_engine_name()}'.")
        self._index_name = index_name.strip()
        self.batch_size = int(helper_config.get_number_val("INDEX_BATCH_SIZE", default=1000))
        if self.batch_size < 1:
            raise ValueError(f"INDEX_BATCH_SIZE must be at least 1, got {self.batch_size}.")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "index"
        """
        return "index"

    def get_index_name(self) -> str:
        """
        Returns the name of the destination index.
        """
        return self._index_name

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_batch(self) -> str:
        """
        Returns the endpoint path for batch write requests on the index.

        Returns:
            str: The endpoint path (e.g. "/1/indexes/posts/batch")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_save_payload(self, records: list[dict]) -> dict:
        """
        Builds the backend-specific payload upserting the given records by id.

        Args:
            records (list[dict]): The records as plain dicts, each carrying an "id".

        Returns:
            dict: The payload for the batch request.
        """
        pass

    @abstractmethod
    def get_delete_payload(self, ids: list[str]) -> dict:
        """
        Builds the backend-specific payload deleting the given ids.

        Args:
            ids (list[str]): The record ids to delete.

        Returns:
            dict: The payload for the batch request.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_save_objects(self, records: list[IndexRecord]) -> None:
        """Upsert records into the index (create-or-replace by id).

        Records are sent in batches of at most ``batch_size``.

        Args:
            records (list[IndexRecord]): The records to save.

        Raises:
            Exception: If a batch request returns a non-2xx status.
        """
        payloads = [record.to_payload() for record in records]
        for batch_start in range(0, len(payloads), self.batch_size):
            batch = payloads[batch_start: batch_start + self.batch_size]
            await self.do_request(
                method="POST",
                json=self.get_save_payload(batch),
                endpoint=self._get_endpoint_batch(),
                raise_on_error=True,
            )
        self.logging.debug("Saved %d record(s) to index '%s'.", len(payloads), self._index_name)

    async def do_delete_objects(self, ids: list[str]) -> None:
        """Delete records from the index by id. Absent ids are not an error.

        Args:
            ids (list[str]): The record ids to delete.

        Raises:
            Exception: If a batch request returns a non-2xx status.
        """
        for batch_start in range(0, len(ids), self.batch_size):
            batch = list(ids[batch_start: batch_start + self.batch_size])
            await self.do_request(
                method="POST",
                json=self.get_delete_payload(batch),
                endpoint=self._get_endpoint_batch(),
                raise_on_error=True,
            )
        self.logging.debug("Deleted %d id(s) from index '%s'.", len(ids), self._index_name)
