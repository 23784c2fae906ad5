"""Embedding service.

Reads the plans and journal entries that have no embedding yet, embeds their
text via an EmbedClient and writes one vector record per document into the
unified AI document store, flagging each source row as embedded.
"""

from pydantic import BaseModel

from services.doc_embedding.text_extractor import extract_text
from shared.clients.embed.EmbedClientInterface import EmbedClientInterface
from shared.clients.store.StoreClientInterface import (
    ENTRIES_COLLECTION,
    PLANS_COLLECTION,
    StoreClientInterface,
)
from shared.helper.HelperConfig import HelperConfig
from shared.models.documents import (
    EmbeddedDocument,
    SourceDocument,
    UnembeddedDocuments,
    VectorRecord,
)


class SyncSummary(BaseModel):
    plans: int = 0
    entries: int = 0


def _collection_of(doc: SourceDocument) -> str:
    """Collection a document belongs to.

    Falls back to the presence of plan_text for documents built outside
    fetch_unembedded_documents(); a null plan_text still marks a plan.
    """
    if doc.source_collection is not None:
        return doc.source_collection
    return PLANS_COLLECTION if "plan_text" in doc.model_fields_set else ENTRIES_COLLECTION


class EmbeddingService:
    """Orchestrates embed-and-persist for unembedded plans and entries."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        embed_client: EmbedClientInterface,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._embed = embed_client

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_sync(self, user_id: str) -> SyncSummary:
        """Embed and persist everything that is not embedded yet.

        Args:
            user_id (str): Owner recorded on the written vector records.

        Returns:
            SyncSummary: Number of plans and entries written.

        Raises:
            Exception: Any fetch, embedding or write failure. Writes committed
                before the failure stay committed.
        """
        pending = await self.fetch_unembedded_documents()
        documents = pending.all()
        if not documents:
            self.logging.info("No unembedded documents found.")
            return SyncSummary()

        embedded = await self.update_embeddings(documents)
        return await self.save_embeddings(embedded, user_id)

    async def fetch_unembedded_documents(self) -> UnembeddedDocuments:
        """Read unembedded plans, then unembedded entries.

        Returns:
            UnembeddedDocuments: Both lists, possibly empty.
        """
        plans = [
            doc.model_copy(update={"source_collection": PLANS_COLLECTION})
            for doc in await self._store.do_fetch_unembedded(PLANS_COLLECTION)
        ]
        entries = [
            doc.model_copy(update={"source_collection": ENTRIES_COLLECTION})
            for doc in await self._store.do_fetch_unembedded(ENTRIES_COLLECTION)
        ]
        self.logging.info(
            "Found %d unembedded plans and %d unembedded entries", len(plans), len(entries)
        )
        return UnembeddedDocuments(plans=plans, entries=entries)

    async def update_embeddings(self, documents: list[SourceDocument]) -> list[EmbeddedDocument]:
        """Attach an embedding to every document.

        All texts are embedded through a single do_embed_documents() call. If
        it fails nothing is returned, so no document ends up half-updated.

        Args:
            documents (list[SourceDocument]): Documents to embed.

        Returns:
            list[EmbeddedDocument]: Same length and order as the input, each
                with its embedding and is_embedded set to True.
        """
        if not documents:
            return []

        texts = [extract_text(doc) for doc in documents]
        embeddings = await self._embed.do_embed_documents(texts)
        if len(embeddings) != len(documents):
            raise ValueError(
                f"Embedding count mismatch: {len(documents)} documents, {len(embeddings)} vectors"
            )

        return [
            EmbeddedDocument.model_validate(
                {
                    **doc.model_dump(),
                    "source_collection": _collection_of(doc),
                    "embedding": embedding,
                    "is_embedded": True,
                }
            )
            for doc, embedding in zip(documents, embeddings)
        ]

    async def save_embeddings(self, documents: list[EmbeddedDocument], user_id: str) -> SyncSummary:
        """Flag each source row as embedded and insert its vector record.

        Writes run one by one: flag update first, then the insert. The first
        failure stops the loop and is re-raised; earlier writes are kept.

        Args:
            documents (list[EmbeddedDocument]): Output of update_embeddings().
            user_id (str): Owner of the vector records.

        Returns:
            SyncSummary: Number of plans and entries written.
        """
        plans = [doc for doc in documents if _collection_of(doc) == PLANS_COLLECTION]
        entries = [doc for doc in documents if _collection_of(doc) != PLANS_COLLECTION]
        embedding_model = self._embed.get_model_name()

        try:
            for plan in plans:
                await self._store.do_mark_embedded(PLANS_COLLECTION, plan.id)
                await self._store.do_insert_vector_record(
                    self._build_plan_record(plan, user_id, embedding_model)
                )

            for entry in entries:
                await self._store.do_mark_embedded(ENTRIES_COLLECTION, entry.id)
                await self._store.do_insert_vector_record(
                    self._build_entry_record(entry, user_id, embedding_model)
                )
        except Exception as exc:
            self.logging.error("Error saving embeddings to database: %s", exc)
            raise

        self.logging.info(
            "Saved %d plan embeddings and %d entry embeddings", len(plans), len(entries)
        )
        return SyncSummary(plans=len(plans), entries=len(entries))

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _build_plan_record(self, plan: EmbeddedDocument, user_id: str, embedding_model: str) -> VectorRecord:
        return VectorRecord(
            user_id=user_id,
            type="plan",
            content=plan.plan_text or "",
            vector=plan.embedding,
            embedding_model=embedding_model,
            metadata={"source_id": plan.id, "generated_at": plan.generated_at},
        )

    def _build_entry_record(self, entry: EmbeddedDocument, user_id: str, embedding_model: str) -> VectorRecord:
        return VectorRecord(
            user_id=user_id,
            type=entry.type or "entry",
            content=entry.content or extract_text(entry),
            vector=entry.embedding,
            embedding_model=embedding_model,
            metadata={
                "source_id": entry.id,
                "entry_type": entry.type,
                "timestamp": entry.timestamp,
            },
        )
