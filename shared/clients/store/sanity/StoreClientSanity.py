from typing import Any

from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class StoreClientSanity(StoreClientInterface):
    """Sanity content lake, queried with GROQ over the HTTP query API."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._project_id = self.get_config_val("PROJECT_ID", default=None, val_type="string")
        self._dataset = self.get_config_val("DATASET", default="production", val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default="2021-10-21", val_type="string").lstrip("v")
        self._token = self.get_config_val("TOKEN", default="", val_type="string")
        self._use_cdn = self.get_config_val("USE_CDN", default=False, val_type="bool")
        self._perspective = self.get_config_val("PERSPECTIVE", default="raw", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Sanity"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="PROJECT_ID", val_type="string", default=None),
            EnvConfig(env_key="DATASET", val_type="string", default="production"),
            EnvConfig(env_key="API_VERSION", val_type="string", default="2021-10-21"),
            EnvConfig(env_key="TOKEN", val_type="string", default=""),
            EnvConfig(env_key="USE_CDN", val_type="bool", default=False),
            EnvConfig(env_key="PERSPECTIVE", val_type="string", default="raw"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        host = "apicdn.sanity.io" if self._use_cdn else "api.sanity.io"
        return f"https://{self._project_id}.{host}"

    def _get_endpoint_healthcheck(self) -> str:
        return "/v1/ping"

    def _get_endpoint_query(self) -> str:
        return f"/v{self._api_version}/data/query/{self._dataset}"

    def _get_query_url_params(self) -> dict | None:
        return {"perspective": self._perspective} if self._perspective else None

    ################ QUERIES ##################
    def get_query_by_ids_and_types(self) -> str:
        return "*[(_id in $ids) && _type in $types]"

    def get_query_by_types_page(self, limit: int) -> str:
        return f"*[_type in $types && _id > $last_id] | order(_id) [0...{int(limit)}]"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_query_payload(self, query: str, params: dict[str, Any]) -> dict:
        return {"query": query, "params": params}

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def extract_query_result(self, raw_response: dict) -> list[dict]:
        result = raw_response.get("result")
        if result is None:
            return []
        if not isinstance(result, list):
            raise Exception(f"Unexpected query result from Sanity, expected a list but got {type(result).__name__}.")
        return result
