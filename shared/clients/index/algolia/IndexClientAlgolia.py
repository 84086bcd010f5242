from urllib.parse import quote

from shared.clients.index.IndexClientInterface import IndexClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class IndexClientAlgolia(IndexClientInterface):
    def __init__(self, helper_config: HelperConfig, index_name: str):
        super().__init__(helper_config=helper_config, index_name=index_name)
        self._app_id = self.get_config_val("APP_ID", default=None, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Algolia"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="APP_ID", val_type="string", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {
            "X-Algolia-Application-Id": self._app_id,
            "X-Algolia-API-Key": self._api_key,
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return f"https://{self._app_id}.algolia.net"

    def _get_endpoint_healthcheck(self) -> str:
        return "/1/isalive"

    def _get_endpoint_batch(self) -> str:
        return f"/1/indexes/{quote(self.get_index_name(), safe='')}/batch"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_save_payload(self, records: list[dict]) -> dict:
        # objectID is Algolia's primary key, it mirrors the document id
        return {
            "requests": [
                {"action": "updateObject", "body": {**record, "objectID": record["id"]}}
                for record in records
            ]
        }

    def get_delete_payload(self, ids: list[str]) -> dict:
        return {
            "requests": [
                {"action": "deleteObject", "body": {"objectID": object_id}}
                for object_id in ids
            ]
        }
