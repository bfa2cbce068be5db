"""
Answer service: embed question → search document chunks → generate grounded answer.

Responsibility: Sequence the three downstream calls for one request and shape the
result. Called by the API; no HTTP types here. The downstream calls are injected
so the flow can run against fakes.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from app.agent.llm import chat_completion
from app.core.config import LLM_MAX_TOKENS, LLM_TEMPERATURE, LLM_TOP_P, MATCH_COUNT, MATCH_THRESHOLD
from app.core.errors import EmbeddingError
from app.schemas.query import ChatMessage, QueryResponse, RetrievedChunk
from app.services.embeddings import embed_texts
from app.services.vector_store import match_chunks

logger = logging.getLogger(__name__)

NO_MATCH_ANSWER = "No relevant information found in the document."

SYSTEM_PROMPT = (
    "You answer questions about a document using only the context provided by the user. "
    "Treat the context as ground truth and do not question or contradict it. "
    "Do not use any outside knowledge. "
    "Answer in 2-3 sentences (about 50-75 words). "
    "If the answer is not in the context, say \"I don't have enough information to answer that question.\""
)

EmbedFn = Callable[[list[str]], Awaitable[list[list[float]]]]
SearchFn = Callable[[list[float], float, int, "str | int"], Awaitable[list[RetrievedChunk]]]
GenerateFn = Callable[[list[dict[str, str]], float, float, int], Awaitable[ChatMessage]]


@dataclass
class AnswerSettings:
    """Fixed retrieval and decoding parameters; override per instance in tests."""

    match_threshold: float = MATCH_THRESHOLD
    match_count: int = MATCH_COUNT
    temperature: float = LLM_TEMPERATURE
    top_p: float = LLM_TOP_P
    max_tokens: int = LLM_MAX_TOKENS
    no_match_answer: str = NO_MATCH_ANSWER
    system_prompt: str = SYSTEM_PROMPT


def build_context(chunks: list[RetrievedChunk]) -> str:
    """Join chunk texts in retrieval order, separated by a blank line."""
    return "\n\n".join(c.chunk_text for c in chunks)


def build_messages(context: str, question: str, system_prompt: str = SYSTEM_PROMPT) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": f"Context:\n{context}\n\nQuestion: {question}"},
    ]


@dataclass
class AnswerService:
    embed: EmbedFn = embed_texts
    search: SearchFn = match_chunks
    generate: GenerateFn = chat_completion
    settings: AnswerSettings = field(default_factory=AnswerSettings)

    async def answer(self, question: str, document_id: str | int) -> QueryResponse:
        """
        Run the pipeline for one question. Every step is attempted once; any
        exception propagates to the caller and aborts the remaining steps.
        """
        logger.info("[answer:answer] IN  question=%r document_id=%s", question, document_id)
        s = self.settings

        vectors = await self.embed([question])
        if not vectors:
            raise EmbeddingError("Failed to create question embedding")
        query_embedding = vectors[0]

        chunks = await self.search(query_embedding, s.match_threshold, s.match_count, document_id)
        if not chunks:
            logger.info("[answer:answer] OUT no chunks above threshold=%.2f", s.match_threshold)
            return QueryResponse(
                answer=ChatMessage(role="assistant", content=s.no_match_answer),
                chunks_used=0,
                similarity_scores=[],
            )

        context = build_context(chunks)
        messages = build_messages(context, question, s.system_prompt)
        logger.info("[answer:answer] context_len=%d chunks=%d", len(context), len(chunks))

        message = await self.generate(messages, s.temperature, s.top_p, s.max_tokens)

        logger.info("[answer:answer] OUT chunks_used=%d answer_len=%d", len(chunks), len(message.content))
        return QueryResponse(
            answer=message,
            chunks_used=len(chunks),
            similarity_scores=[c.similarity for c in chunks],
        )


def get_answer_service() -> AnswerService:
    """FastAPI dependency: a fresh service per request, wired to the configured clients."""
    return AnswerService()
