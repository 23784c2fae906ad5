from typing import Any

from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class StoreClientSupabase(StoreClientInterface):
    """Supabase datastore accessed through its PostgREST API with the service key."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("URL", default=None, val_type="string")
        self._service_key = self.get_config_val("SERVICE_KEY", default=None, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Supabase"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="URL", val_type="string", default=None),
            EnvConfig(env_key="SERVICE_KEY", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/rest/v1/"

    def _get_endpoint_collection(self, collection: str) -> str:
        return f"/rest/v1/{collection}"

    def _get_endpoint_procedure(self, procedure: str) -> str:
        return f"/rest/v1/rpc/{procedure}"

    ################ PAYLOAD BUILDER ##################
    def get_equals_filter(self, field: str, value: Any) -> dict:
        # PostgREST spells booleans in lowercase
        if isinstance(value, bool):
            value = "true" if value else "false"
        return {field: f"eq.{value}"}

    def get_single_row_headers(self) -> dict:
        # PostgREST answers 406 unless exactly one row matches
        return {"Accept": "application/vnd.pgrst.object+json"}

    def get_match_payload(self, user_id: str, query_vector: list[float], limit: int) -> dict:
        return {
            "match_user_id": user_id,
            "match_embedding": query_vector,
            "match_limit": limit,
        }
