from shared.helper.HelperConfig import HelperConfig
from shared.clients.index.IndexClientInterface import IndexClientInterface
from shared.clients.index.models.TypeIndexMap import TypeIndexMap

class IndexClientManager:
    """
    Manager class building one index client per document type based on configuration.

    INDEX_ENGINE selects the backend, INDEX_TYPE_MAP assigns each document type
    its destination index, e.g. "[post:prod_posts,page:prod_pages]".
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.type_index_map = self._initialize_type_index_map()

    def _get_engine_from_env(self) -> str:
        """
        Reads the index engine from ENV configuration.

        Returns:
            str: The name of the index engine, capitalized (e.g. "Algolia").

        Raises:
            ValueError: If no index engine is specified in the configuration.
        """
        engine = self.helper_config.get_string_val("INDEX_ENGINE")
        if not engine:
            raise ValueError("No index engine specified in configuration.")
        return engine.strip().lower().capitalize()

    def _get_type_map_from_env(self) -> dict[str, str]:
        """
        Reads the ``type -> index name`` assignment from ENV configuration.

        Raises:
            ValueError: If no type is configured.
        """
        type_map = self.helper_config.get_mapping_val("INDEX_TYPE_MAP")
        if not type_map:
            raise ValueError("No document types specified in INDEX_TYPE_MAP.")
        return type_map

    def _get_client_class(self, engine: str) -> type[IndexClientInterface]:
        className = f"IndexClient{engine}"
        # import the class from shared.clients.index.{engine}.{className}
        try:
            module = __import__(
                f"shared.clients.index.{engine.lower()}.{className}",
                fromlist=[className],
            )
            return getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported index engine specified: '{engine}'. Error: {e}")

    def _initialize_type_index_map(self) -> TypeIndexMap:
        """
        Instantiates one index client per configured document type.

        Returns:
            TypeIndexMap: The immutable type to index client table.

        Raises:
            ValueError: If the engine is unsupported or no type is configured.
        """
        client_class = self._get_client_class(self._get_engine_from_env())
        clients: dict[str, IndexClientInterface] = {}
        for type_name, index_name in self._get_type_map_from_env().items():
            clients[type_name] = client_class(helper_config=self.helper_config, index_name=index_name)
            self.logging.debug("Instantiated index client for type '%s' -> index '%s'", type_name, index_name)
        return TypeIndexMap(clients)

    def get_type_index_map(self) -> TypeIndexMap:
        """
        Returns the type to index client table.
        """
        return self.type_index_map

    def get_clients(self) -> list[IndexClientInterface]:
        """
        Returns every instantiated index client.
        """
        return self.type_index_map.get_clients()
