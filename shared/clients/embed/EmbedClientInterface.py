from abc import abstractmethod

from typing import Any
from shared.clients.ClientInterface import ClientInterface
from shared.clients.embed.models.FeatureResponse import normalize_feature_response
from shared.clients.errors import EmbeddingRequestFailed, InvalidResponseShape

from shared.helper.HelperConfig import HelperConfig

DEFAULT_EMBED_MODEL = "sentence-transformers/all-mpnet-base-v2"


class EmbedClientInterface(ClientInterface):
    request_error_class = EmbeddingRequestFailed

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

        # model config
        self.embed_model = helper_config.get_string_val(f"{self.get_client_type().upper()}_MODEL", default=DEFAULT_EMBED_MODEL)
        dimension = helper_config.get_optional_string_val(f"{self.get_client_type().upper()}_DIMENSION")
        self.embed_dimension: int | None = int(dimension) if dimension else None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "embed"
        """
        return "embed"

    def get_model_name(self) -> str:
        return self.embed_model

    ################ ENDPOINTS ##################
    @abstractmethod
    def get_endpoint_embedding(self, model: str) -> str:
        """
        Returns the endpoint path for feature-extraction requests of a model.

        Args:
            model (str): The embedding model identifier.

        Returns:
            str: The endpoint path (e.g. "/sentence-transformers/all-mpnet-base-v2/pipeline/feature-extraction")
        """
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def get_embed_payload(self, text: str, model: str) -> dict:
        """Build the backend-specific request body for embedding a single text.

        Args:
            text (str): The text to embed.
            model (str): The embedding model identifier.

        Returns:
            dict: JSON-serialisable request body.
        """
        pass

    ##########################################
    ################# OTHER ##################
    ##########################################

    def extract_embedding_from_response(self, response_data: Any) -> list[float]:
        """Extract one flat embedding vector from a raw feature-extraction response.

        Args:
            response_data (Any): The parsed JSON response body.

        Returns:
            list[float]: The flat embedding vector.

        Raises:
            InvalidResponseShape: If the response is not list-shaped.
            ValueError: If EMBED_DIMENSION is set and the vector length differs.
        """
        normalized = normalize_feature_response(response_data)
        if not normalized.is_valid:
            raise InvalidResponseShape(
                f"{self.get_engine_name()} embedding response is not an array: {normalized.detail}"
            )
        if self.embed_dimension is not None and len(normalized.vector) != self.embed_dimension:
            raise ValueError(
                f"Embedding dimension mismatch: expected {self.embed_dimension}, got {len(normalized.vector)}"
            )
        return normalized.vector

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_embed_documents(self, texts: list[str], model: str | None = None) -> list[list[float]]:
        """Embed each text with its own request, sequentially and in order.

        One request per text keeps the load on the hosted API at one call in
        flight. The first failure aborts the whole batch and nothing is returned.

        Args:
            texts (list[str]): The texts to embed, one logical document each.
            model (str | None): Overrides the configured embedding model.

        Returns:
            list[list[float]]: One flat vector per input text, index-aligned.

        Raises:
            EmbeddingRequestFailed: If the backend returns a non-2xx status.
            InvalidResponseShape: If a response is not list-shaped.
        """
        model = model or self.embed_model
        embeddings: list[list[float]] = []
        for text in texts:
            response = await self.do_request(
                method="POST",
                endpoint=self.get_endpoint_embedding(model),
                json=self.get_embed_payload(text, model),
                raise_on_error=True,
            )
            embeddings.append(self.extract_embedding_from_response(response.json()))
        self.logging.debug("Embedded %d text(s) with model '%s'.", len(embeddings), model)
        return embeddings

    async def do_embed_query(self, text: str, model: str | None = None) -> list[float]:
        """Embed a single query text.

        Args:
            text (str): The query text.
            model (str | None): Overrides the configured embedding model.

        Returns:
            list[float]: The query vector.
        """
        return (await self.do_embed_documents([text], model=model))[0]
