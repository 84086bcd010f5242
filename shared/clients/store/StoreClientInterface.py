from abc import abstractmethod
from typing import Any

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document


class StoreClientInterface(ClientInterface):
    """Client of a document store that answers parameterised queries."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.page_size = int(helper_config.get_number_val("STORE_PAGE_SIZE", default=1000))

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "store"
        """
        return "store"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_query(self) -> str:
        """
        Returns the endpoint path for query requests.

        Returns:
            str: The endpoint path (e.g. "/v2021-10-21/data/query/production")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ################ QUERIES ##################
    @abstractmethod
    def get_query_by_ids_and_types(self) -> str:
        """
        Returns the query selecting documents whose id is in the bound parameter
        ``ids`` and whose type is in the bound parameter ``types``.

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def get_query_by_types_page(self, limit: int) -> str:
        """
        Returns the query selecting at most ``limit`` documents whose type is in
        the bound parameter ``types`` and whose id sorts after the bound
        parameter ``last_id``, ordered by id.

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_query_payload(self, query: str, params: dict[str, Any]) -> dict:
        """
        Builds the backend-specific request body for a query. Parameters must be
        sent as bound variables, never interpolated into the query string.

        Args:
            query (str): The query string.
            params (dict[str, Any]): The bound variables of the query.

        Returns:
            dict: The payload for the query request.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def extract_query_result(self, raw_response: dict) -> list[dict]:
        """
        Extracts the list of raw documents from a raw query response.

        Args:
            raw_response (dict): The raw JSON response from the query endpoint.

        Returns:
            list[dict]: The raw documents.
        """
        pass

    def _parse_document(self, raw_document: dict) -> Document:
        """
        Parses a raw document dict into a Document.

        Raises:
            pydantic.ValidationError: If the document carries no id or type.
        """
        return Document.model_validate(raw_document)

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_query(self, query: str, params: dict[str, Any] | None = None) -> list[dict]:
        """Run a parameterised query against the document store.

        Args:
            query (str): The query string.
            params (dict[str, Any] | None): Bound variables of the query.

        Returns:
            list[dict]: The raw documents matched by the query.

        Raises:
            Exception: If the request fails or returns a non-2xx status.
        """
        resp = await self.do_request(
            method="POST",
            json=self.get_query_payload(query, params or {}),
            params=self._get_query_url_params(),
            endpoint=self._get_endpoint_query(),
            raise_on_error=True,
        )
        return self.extract_query_result(resp.json())

    def _get_query_url_params(self) -> dict | None:
        """Returns additional URL parameters sent with every query. None by default."""
        return None

    async def do_fetch_documents_by_ids_and_types(self, ids: list[str], types: list[str]) -> list[Document]:
        """Fetch the current state of the given documents, restricted to the given types.

        Ids that no longer exist or whose type is not listed are silently omitted
        by the store.

        Args:
            ids (list[str]): The document ids to resolve.
            types (list[str]): The document types to accept.

        Returns:
            list[Document]: The resolved documents.
        """
        if not ids or not types:
            return []
        raw_documents = await self.do_query(
            self.get_query_by_ids_and_types(),
            {"ids": list(ids), "types": list(types)},
        )
        self.logging.debug(
            "Fetched %d of %d requested documents from %s.", len(raw_documents), len(ids), self.get_engine_name()
        )
        return [self._parse_document(raw) for raw in raw_documents]

    async def do_fetch_documents_by_types(self, types: list[str]) -> list[Document]:
        """Fetch every document of the given types, paging through the store by id.

        Args:
            types (list[str]): The document types to fetch.

        Returns:
            list[Document]: All documents of the given types, ordered by id.
        """
        if not types:
            return []
        documents: list[Document] = []
        last_id = ""
        page = 1
        while True:
            raw_documents = await self.do_query(
                self.get_query_by_types_page(self.page_size),
                {"types": list(types), "last_id": last_id},
            )
            documents.extend(self._parse_document(raw) for raw in raw_documents)
            self.logging.info(
                "Fetched documents page %d from %s, total documents so far: %d",
                page, self.get_engine_name(), len(documents),
            )
            if len(raw_documents) < self.page_size:
                break
            last_id = documents[-1].id
            page += 1
        return documents
