"""Plan service: retrieval-augmented fitness plan generation.

Flow: resolve the user's goal → embed the request → fetch the nearest stored
context → assemble the prompt → call the chat completion backend.
Goal lookup and context retrieval fail soft; everything else propagates.
"""

from services.doc_embedding.EmbeddingService import EmbeddingService
from server.core.prompts import build_prompt, fitness_plan_prompt_template
from shared.clients.embed.EmbedClientInterface import EmbedClientInterface
from shared.clients.llm.LLMClientInterface import LLMClientInterface
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.documents import RagContextDocument, RagRequest
from shared.models.results import SoftResult

DEFAULT_PLAN_INPUT = "Create a new fitness plan"


class PlanService:
    """Orchestrates embedding, retrieval, prompt assembly and completion."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        embed_client: EmbedClientInterface,
        llm_client: LLMClientInterface,
        embedding_service: EmbeddingService,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._embed = embed_client
        self._llm = llm_client
        self._embedding_service = embedding_service
        self._top_k = int(helper_config.get_number_val("RAG_TOP_K", default=5))

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_generate_plan(self, user_id: str, input: str | None = None) -> str:
        """Bring the user's vectors up to date, then generate a plan.

        Args:
            user_id (str): The requesting user.
            input (str | None): Free-text request, defaults to a generic one.

        Returns:
            str: The generated plan text.
        """
        await self._embedding_service.do_sync(user_id)
        return await self.do_rag_call(
            RagRequest(
                user_id=user_id,
                input=input or DEFAULT_PLAN_INPUT,
                model=self._llm.get_model_name(),
                prompt_template=fitness_plan_prompt_template,
                embedding_model=self._embed.get_model_name(),
                top_k=self._top_k,
            )
        )

    async def do_rag_call(self, request: RagRequest) -> str:
        """Run one retrieval-augmented completion.

        Args:
            request (RagRequest): User, input, models, template and top_k.

        Returns:
            str: The text extracted from the completion.

        Raises:
            EmbeddingRequestFailed, InvalidResponseShape: If the query cannot be embedded.
            CompletionRequestFailed: If the completion backend rejects the call.
        """
        goal = await self.fetch_user_goal(request.user_id)
        query_vector = await self._embed.do_embed_query(request.input, model=request.embedding_model)
        context = await self.fetch_context(request.user_id, query_vector, request.top_k)

        prompt = build_prompt(context.value, goal.value, request.input, template=request.prompt_template)
        self.logging.debug("Final prompt sent to %s:\n%s", self._llm.get_engine_name(), prompt)

        result = await self._llm.do_invoke(prompt, model=request.model)
        self.logging.info(
            "Plan generated for user %s (%d context docs, %d chars).",
            request.user_id, len(context.value), len(result),
        )
        return result

    ##########################################
    ############### LOOKUPS ##################
    ##########################################

    async def fetch_user_goal(self, user_id: str) -> SoftResult[str]:
        """Look up the user's stated goal, defaulting to "" on any failure."""
        try:
            return SoftResult[str].success(await self._store.do_fetch_user_goal(user_id))
        except Exception as exc:
            self.logging.warning("Could not fetch goal for user %s, using empty string: %s", user_id, exc)
            return SoftResult[str].fallback("", str(exc))

    async def fetch_context(
        self, user_id: str, query_vector: list[float], top_k: int = 5
    ) -> SoftResult[list[RagContextDocument]]:
        """Fetch up to top_k nearest stored documents of the user.

        Never raises: on a retrieval error the result holds an empty list and
        generation continues without historical context.
        """
        try:
            docs = await self._store.do_match_vectors(user_id, query_vector, top_k)
            return SoftResult[list[RagContextDocument]].success(docs[:top_k])
        except Exception as exc:
            self.logging.warning("Error fetching RAG context for user %s: %s", user_id, exc)
            return SoftResult[list[RagContextDocument]].fallback([], str(exc))
