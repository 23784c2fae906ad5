from shared.clients.llm.LLMClientInterface import LLMClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

OPENROUTER_URL = "https://openrouter.ai/api/v1"


class LLMClientOpenrouter(LLMClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=OPENROUTER_URL, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Openrouter"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=OPENROUTER_URL),
            EnvConfig(env_key="API_KEY", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {"Authorization": f"Bearer {self._api_key}"}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/models"

    def _get_endpoint_chat(self) -> str:
        return "/chat/completions"

    ################ PAYLOAD BUILDER ##################
    def get_chat_payload(self, prompt: str, model: str) -> dict:
        """Build the chat completion request body.

        The prompt is sent as the only user message, as a single text segment.

        Returns:
            dict: {"model": "...", "messages": [...], "parameters": {"max_new_tokens": N}}
        """
        return {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": [{"type": "text", "text": prompt}],
                }
            ],
            "parameters": {"max_new_tokens": self.max_new_tokens},
        }

    ##########################################
    ################# OTHER ##################
    ##########################################

    def extract_chat_response(self, response_data: dict) -> str:
        """Extract the reply from choices[0].message.content.

        Content may be a list of typed segments, in which case only the "text"
        segments are kept and joined by newlines. Plain string content is
        returned unchanged. A missing message yields an empty string.
        """
        choices = response_data.get("choices") or []
        if not choices:
            return ""
        content = (choices[0].get("message") or {}).get("content") or []
        if isinstance(content, str):
            return content
        return "\n".join(
            segment.get("text", "")
            for segment in content
            if isinstance(segment, dict) and segment.get("type") == "text"
        )
