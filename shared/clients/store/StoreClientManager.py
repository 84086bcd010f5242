from shared.helper.HelperConfig import HelperConfig
from shared.clients.store.StoreClientInterface import StoreClientInterface

class StoreClientManager:
    """
    Manager class to handle the document store client based on configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the store engine from ENV configuration.

        Returns:
            str: The name of the store engine, capitalized (e.g. "Sanity").

        Raises:
            ValueError: If no store engine is specified in the configuration.
        """
        engine = self.helper_config.get_string_val("STORE_ENGINE")
        if not engine:
            raise ValueError("No store engine specified in configuration.")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> StoreClientInterface:
        """
        Initializes the store client based on the engine specified in the configuration.

        Returns:
            StoreClientInterface: An instance of the store client for the configured engine.

        Raises:
            ValueError: If the engine is unsupported.
        """
        engine = self._get_engine_from_env()
        className = f"StoreClient{engine}"
        # import the class from shared.clients.store.{engine}.{className}
        try:
            module = __import__(
                f"shared.clients.store.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported store engine specified: '{engine}'. Error: {e}")

        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated store client for engine: %s", engine)
        return client

    def get_client(self) -> StoreClientInterface:
        """
        Returns the instantiated store client.

        Returns:
            StoreClientInterface: The store client instance.
        """
        return self.client
