from shared.clients.embed.EmbedClientInterface import EmbedClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

HF_ROUTER_URL = "https://router.huggingface.co/hf-inference/models"


class EmbedClientHuggingface(EmbedClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=HF_ROUTER_URL, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")
        self._provider = self.get_config_val("PROVIDER", default="hf-inference", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Huggingface"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=HF_ROUTER_URL),
            EnvConfig(env_key="API_KEY", val_type="string", default=None),
            EnvConfig(env_key="PROVIDER", val_type="string", default="hf-inference"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {"Authorization": f"Bearer {self._api_key}"}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return f"/{self.embed_model}"

    def get_endpoint_embedding(self, model: str) -> str:
        return f"/{model}/pipeline/feature-extraction"

    ################ PAYLOAD BUILDER ##################
    def get_embed_payload(self, text: str, model: str) -> dict:
        """Build the feature-extraction request body.

        Returns:
            dict: {"model": "...", "inputs": "...", "provider": "hf-inference"}
        """
        return {"model": model, "inputs": text, "provider": self._provider}
