from abc import abstractmethod

from typing import Any
from shared.clients.ClientInterface import ClientInterface
from shared.clients.errors import CompletionRequestFailed
from shared.helper.HelperConfig import HelperConfig

DEFAULT_CHAT_MODEL = "google/gemma-3-4b-it:free"
DEFAULT_MAX_NEW_TOKENS = 512


class LLMClientInterface(ClientInterface):
    request_error_class = CompletionRequestFailed

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

        # chat / completion config
        self.chat_model = helper_config.get_string_val(f"{self.get_client_type().upper()}_CHAT_MODEL", default=DEFAULT_CHAT_MODEL)
        self.max_new_tokens = int(helper_config.get_number_val(f"{self.get_client_type().upper()}_MAX_NEW_TOKENS", default=DEFAULT_MAX_NEW_TOKENS))

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "llm"

    def get_model_name(self) -> str:
        return self.chat_model

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_chat(self) -> str:
        """Returns the endpoint path for chat/completion requests (e.g. "/chat/completions")."""
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def get_chat_payload(self, prompt: str, model: str) -> dict:
        """Build the backend-specific request body for a single-prompt chat request.

        Args:
            prompt (str): The assembled prompt, sent as the only user message.
            model (str): The chat model identifier.

        Returns:
            dict: JSON-serialisable request body.
        """
        pass

    ##########################################
    ################# OTHER ##################
    ##########################################

    @abstractmethod
    def extract_chat_response(self, response_data: dict) -> str:
        """Extract the assistant reply text from a raw chat API response.

        Args:
            response_data (dict): The parsed JSON response body.

        Returns:
            str: The assistant reply text.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_invoke(self, prompt: str, model: str | None = None) -> str:
        """Send one chat/completion request and return the assistant reply text.

        No retry and no streaming.

        Args:
            prompt (str): The assembled prompt.
            model (str | None): Overrides the configured chat model.

        Returns:
            str: The assistant reply text.

        Raises:
            CompletionRequestFailed: If the endpoint returns a non-2xx status.
        """
        model = model or self.chat_model
        response = await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_chat(),
            json=self.get_chat_payload(prompt, model),
            raise_on_error=True,
        )
        data: Any = response.json()
        return self.extract_chat_response(data if isinstance(data, dict) else {})
