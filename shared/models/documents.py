"""Pydantic models for the documents flowing through the RAG pipeline.

Hierarchy:
  SourceDocument     : a plan or journal entry as stored in the datastore.
  EmbeddedDocument   : a SourceDocument with its embedding attached.
  VectorRecord       : the normalized row written to the AI document store.
  RagContextDocument : a nearest-neighbour hit returned by the datastore.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator

PromptTemplate = Callable[[list[str], str, str], str]


class SourceDocument(BaseModel):
    """A plan or journal entry fetched from the datastore.

    Only the fields the pipeline reads are declared. Any other column of the
    row is kept as an extra attribute so the document round-trips unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int
    is_embedded: bool = False

    # text-bearing fields, in extraction priority order
    title: str | None = None
    name: str | None = None
    description: str | None = None
    content: str | None = None
    notes: str | None = None

    # plan specific
    plan_text: str | None = None
    generated_at: str | None = None

    # entry specific
    type: str | None = None
    timestamp: str | None = None

    # collection the row was read from, set by the embedding service
    source_collection: str | None = None


class EmbeddedDocument(SourceDocument):
    """A SourceDocument with its embedding vector attached."""

    embedding: list[float]
    is_embedded: bool = True


class UnembeddedDocuments(BaseModel):
    """Plans and entries still waiting for an embedding."""

    plans: list[SourceDocument] = []
    entries: list[SourceDocument] = []

    def all(self) -> list[SourceDocument]:
        return [*self.plans, *self.entries]


class VectorRecord(BaseModel):
    """Row of the unified AI document store.

    Exactly one record is written per embedded SourceDocument; the source id is
    kept in metadata["source_id"].
    """

    user_id: str
    type: str
    content: str
    vector: list[float]
    embedding_model: str
    metadata: dict[str, Any]


class RagContextMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    created_at: str | None = None
    timestamp: str | None = None

    @field_validator("created_at", "timestamp", mode="before")
    @classmethod
    def _stringify_date(cls, value: Any) -> str | None:
        return None if value is None else str(value)


class RagContextDocument(BaseModel):
    """A stored document returned by nearest-neighbour retrieval.

    Rows are rendered as they come back, so a null content becomes "".
    """

    content: str = ""
    metadata: RagContextMetadata | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return "" if value is None else value

    def date_label(self) -> str:
        if self.metadata is None:
            return "unknown"
        return self.metadata.created_at or self.metadata.timestamp or "unknown"


class RagRequest(BaseModel):
    """Input of a single retrieval-augmented completion.

    Attributes:
        user_id:          Owner of the context that may be retrieved.
        input:            The user's request text; also the retrieval query.
        model:            Chat completion model identifier.
        prompt_template:  Pure function (context, goal, input) -> prompt.
        embedding_model:  Model used to embed the query.
        top_k:            Maximum number of context documents.
    """

    user_id: str
    input: str
    model: str
    prompt_template: PromptTemplate
    embedding_model: str
    top_k: int = 5
