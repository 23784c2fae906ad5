"""Exceptions raised by the backend clients."""


class ClientError(Exception):
    """Base class for failures talking to an external backend."""


class RequestFailed(ClientError):
    """A backend answered with a non-success HTTP status.

    Attributes:
        status_code (int): The HTTP status returned by the backend.
        body (str): The raw response body, for diagnostics.
    """

    backend = "Backend"

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{self.backend} request failed with status {status_code}: {body}")


class EmbeddingRequestFailed(RequestFailed):
    backend = "Embedding"


class CompletionRequestFailed(RequestFailed):
    backend = "Completion"


class StoreRequestFailed(RequestFailed):
    backend = "Document store"


class InvalidResponseShape(ClientError):
    """A backend answered successfully but with a payload of the wrong shape."""
