"""
Shared fakes for the answer pipeline so tests do not need the embeddings worker, Supabase or an LLM.
"""

import pytest

from app.schemas.query import ChatMessage, RetrievedChunk


class FakeBackends:
    """Records every downstream call; configure return values or errors per test."""

    def __init__(self) -> None:
        self.vector = [0.1, 0.2, 0.3]
        self.chunks: list[RetrievedChunk] = []
        self.reply = ChatMessage(role="assistant", content="Fake answer.")
        self.embed_error: Exception | None = None
        self.search_error: Exception | None = None
        self.generate_error: Exception | None = None
        self.embed_calls: list[list[str]] = []
        self.search_calls: list[tuple] = []
        self.generate_calls: list[tuple] = []

    def use_chunks(self, texts: list[str], scores: list[float], document_id: str = "doc-1") -> list[RetrievedChunk]:
        """Make search return one chunk per (text, score), in the given order."""
        self.chunks = [
            RetrievedChunk(id=f"c{i}", document_id=document_id, chunk_text=t, similarity=s)
            for i, (t, s) in enumerate(zip(texts, scores))
        ]
        return self.chunks

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.embed_calls.append(texts)
        if self.embed_error:
            raise self.embed_error
        return [self.vector for _ in texts]

    async def search(self, embedding, match_threshold, match_count, document_id) -> list[RetrievedChunk]:
        self.search_calls.append((embedding, match_threshold, match_count, document_id))
        if self.search_error:
            raise self.search_error
        return self.chunks

    async def generate(self, messages, temperature, top_p, max_tokens) -> ChatMessage:
        self.generate_calls.append((messages, temperature, top_p, max_tokens))
        if self.generate_error:
            raise self.generate_error
        return self.reply


@pytest.fixture
def fakes() -> FakeBackends:
    return FakeBackends()
