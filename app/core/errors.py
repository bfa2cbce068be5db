"""
Application errors for clean API error handling.

Use ServiceUnavailableError when a dependency (vector store, embeddings, LLM)
is misconfigured so the API can fail before any network call. RAGError
subclasses mark which step of the answer pipeline failed; the kind is logged,
the message is what the client sees.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. vector store, embeddings API) is unavailable or misconfigured."""

    kind = "unavailable"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RAGError(Exception):
    """Base for failures of a downstream call in the answer pipeline."""

    kind = "internal"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EmbeddingError(RAGError):
    """Embeddings service returned a non-success status or no vector."""

    kind = "embedding"


class SearchError(RAGError):
    """Similarity search RPC reported an error."""

    kind = "search"

    def __init__(self, message: str) -> None:
        super().__init__(f"Search error: {message}")


class GenerationError(RAGError):
    """Chat completion failed or returned no usable choice."""

    kind = "generation"
