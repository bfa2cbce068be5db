"""
Vector store client: similarity search over document chunks in Supabase.

Responsibility: Call the match_chunks Postgres function through the PostgREST
RPC endpoint and return the rows as RetrievedChunk, in the order the database
ranked them.
"""

import logging

import httpx

from app.core.config import MATCH_FUNCTION, SEARCH_API_TIMEOUT, SUPABASE_SERVICE_KEY, SUPABASE_URL
from app.core.errors import SearchError, ServiceUnavailableError
from app.schemas.query import RetrievedChunk

logger = logging.getLogger(__name__)


def _rpc_url() -> str:
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        raise ServiceUnavailableError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set in .env")
    return f"{SUPABASE_URL}/rest/v1/rpc/{MATCH_FUNCTION}"


def _error_message(response: httpx.Response) -> str:
    """PostgREST errors are {"message", "code", "details", "hint"}; fall back to raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text[:500] or f"HTTP {response.status_code}"


async def match_chunks(
    query_embedding: list[float],
    match_threshold: float,
    match_count: int,
    document_id: str | int,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RetrievedChunk]:
    """
    Return up to match_count chunks of document_id with similarity >= match_threshold.

    Raises SearchError when the RPC fails; an empty or null result is [] (not an error).
    """
    url = _rpc_url()
    headers = {
        "apikey": SUPABASE_SERVICE_KEY,
        "Authorization": f"Bearer {SUPABASE_SERVICE_KEY}",
        "Content-Type": "application/json",
    }
    payload = {
        "query_embedding": query_embedding,
        "match_threshold": match_threshold,
        "match_count": match_count,
        "doc_id": document_id,
    }
    logger.info(
        "[vector_store:match_chunks] IN  document_id=%s threshold=%.2f count=%d dim=%d",
        document_id, match_threshold, match_count, len(query_embedding),
    )
    try:
        async with httpx.AsyncClient(timeout=SEARCH_API_TIMEOUT, transport=transport) as client:
            response = await client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as e:
        raise SearchError(str(e) or type(e).__name__) from e

    if not response.is_success:
        message = _error_message(response)
        logger.warning("[vector_store:match_chunks] RPC error %s: %s", response.status_code, message)
        raise SearchError(message)

    rows = response.json() or []
    chunks = [RetrievedChunk.model_validate(row) for row in rows]
    logger.info(
        "[vector_store:match_chunks] OUT chunks=%d scores=%s",
        len(chunks), [round(c.similarity, 4) for c in chunks],
    )
    return chunks
