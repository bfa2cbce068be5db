"""
Embeddings client: turn question text into vectors via the embeddings worker.

Responsibility: POST a JSON array of strings to the worker and return one vector
per input, in the same order. No normalization here; the worker owns the model.
"""

import logging

import httpx

from app.core.config import EMBED_API_TIMEOUT, EMBEDDINGS_API_KEY, EMBEDDINGS_URL
from app.core.errors import EmbeddingError, ServiceUnavailableError

logger = logging.getLogger(__name__)


async def embed_texts(
    texts: list[str],
    *,
    url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[list[float]]:
    """
    Embed texts with the embeddings worker. Single attempt, no retry.

    Raises EmbeddingError on a transport failure, a non-2xx response or a body that is not a list of vectors.
    """
    url = url or EMBEDDINGS_URL
    if not url:
        raise ServiceUnavailableError("EMBEDDINGS_URL must be set in .env")
    if not texts:
        return []

    headers = {"Content-Type": "application/json"}
    if EMBEDDINGS_API_KEY:
        headers["Authorization"] = f"Bearer {EMBEDDINGS_API_KEY}"

    logger.info("[embeddings:embed_texts] IN  texts=%d", len(texts))
    try:
        async with httpx.AsyncClient(timeout=EMBED_API_TIMEOUT, transport=transport) as client:
            response = await client.post(url, json=texts, headers=headers)
    except httpx.HTTPError as e:
        raise EmbeddingError(str(e) or type(e).__name__) from e

    if not response.is_success:
        logger.warning("[embeddings:embed_texts] worker error %s: %s", response.status_code, response.text[:200])
        raise EmbeddingError("Failed to create question embedding")

    vectors = response.json()
    if not isinstance(vectors, list) or not vectors or not isinstance(vectors[0], list):
        logger.warning("[embeddings:embed_texts] unexpected body type=%s", type(vectors).__name__)
        raise EmbeddingError("Failed to create question embedding")

    logger.info("[embeddings:embed_texts] OUT vectors=%d dim=%d", len(vectors), len(vectors[0]))
    return vectors
