from abc import abstractmethod
from typing import Any

from pydantic import ValidationError

from shared.clients.ClientInterface import ClientInterface
from shared.clients.errors import StoreRequestFailed
from shared.helper.HelperConfig import HelperConfig
from shared.models.documents import RagContextDocument, SourceDocument, VectorRecord

PLANS_COLLECTION = "plans"
ENTRIES_COLLECTION = "entries"
VECTOR_COLLECTION = "ai_docs"
USERS_COLLECTION = "app_users"
MATCH_PROCEDURE = "match_vectors"


class StoreClientInterface(ClientInterface):
    """Document store holding plans, journal entries, users and vector records.

    Every method issues exactly one remote call; none of them spans a
    transaction.
    """

    request_error_class = StoreRequestFailed

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "store"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_collection(self, collection: str) -> str:
        """
        Returns the endpoint path for row operations on a collection.

        Args:
            collection (str): The collection (table) name, e.g. "plans".

        Returns:
            str: The endpoint path (e.g. "/rest/v1/plans")
        """
        pass

    @abstractmethod
    def _get_endpoint_procedure(self, procedure: str) -> str:
        """
        Returns the endpoint path for calling a server-side procedure.

        Args:
            procedure (str): The procedure name, e.g. "match_vectors".

        Returns:
            str: The endpoint path (e.g. "/rest/v1/rpc/match_vectors")
        """
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def get_equals_filter(self, field: str, value: Any) -> dict:
        """Build the query parameters selecting rows where field equals value.

        Args:
            field (str): Column name.
            value (Any): Value to match.

        Returns:
            dict: Query parameters understood by the backend.
        """
        pass

    @abstractmethod
    def get_single_row_headers(self) -> dict:
        """Headers asking the backend for exactly one row as a JSON object."""
        pass

    @abstractmethod
    def get_match_payload(self, user_id: str, query_vector: list[float], limit: int) -> dict:
        """Build the body for the nearest-neighbour search procedure.

        Args:
            user_id (str): Only vectors of this user may be returned.
            query_vector (list[float]): The query embedding.
            limit (int): Maximum number of rows.

        Returns:
            dict: JSON-serialisable request body.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_fetch_unembedded(self, collection: str) -> list[SourceDocument]:
        """Fetch every row of a collection whose is_embedded flag is false.

        Args:
            collection (str): "plans" or "entries".

        Returns:
            list[SourceDocument]: The rows, in backend order.

        Raises:
            StoreRequestFailed: If the read fails.
        """
        params = {"select": "*", **self.get_equals_filter("is_embedded", False)}
        response = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_collection(collection),
            params=params,
            raise_on_error=True,
        )
        return [SourceDocument.model_validate(row) for row in response.json() or []]

    async def do_mark_embedded(self, collection: str, doc_id: str | int) -> None:
        """Set is_embedded = true on a single row.

        Raises:
            StoreRequestFailed: If the update fails.
        """
        await self.do_request(
            method="PATCH",
            endpoint=self._get_endpoint_collection(collection),
            params=self.get_equals_filter("id", doc_id),
            json={"is_embedded": True},
            raise_on_error=True,
        )

    async def do_insert_vector_record(self, record: VectorRecord) -> None:
        """Insert one VectorRecord into the unified AI document collection.

        Raises:
            StoreRequestFailed: If the insert fails.
        """
        await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_collection(VECTOR_COLLECTION),
            json=record.model_dump(),
            additional_headers={"Prefer": "return=minimal"},
            raise_on_error=True,
        )

    async def do_fetch_user_goal(self, user_id: str) -> str:
        """Read the stated goal of a user.

        Returns:
            str: The goal, or "" if the row has none.

        Raises:
            StoreRequestFailed: If the user does not exist or the read fails.
        """
        response = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_collection(USERS_COLLECTION),
            params={"select": "goal", **self.get_equals_filter("id", user_id)},
            additional_headers=self.get_single_row_headers(),
            raise_on_error=True,
        )
        row = response.json() or {}
        return row.get("goal") or ""

    async def do_match_vectors(self, user_id: str, query_vector: list[float], limit: int = 5) -> list[RagContextDocument]:
        """Run the nearest-neighbour search procedure scoped to one user.

        Returns:
            list[RagContextDocument]: Up to limit rows, most similar first.

        Raises:
            StoreRequestFailed: If the procedure call fails.
        """
        response = await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_procedure(MATCH_PROCEDURE),
            json=self.get_match_payload(user_id, query_vector, limit),
            raise_on_error=True,
        )
        docs: list[RagContextDocument] = []
        for row in response.json() or []:
            try:
                docs.append(RagContextDocument.model_validate(row))
            except ValidationError as e:
                self.logging.warning("Skipping malformed %s row: %s", MATCH_PROCEDURE, e)
        return docs
