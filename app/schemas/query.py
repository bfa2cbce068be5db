"""Schemas for the query endpoint."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request body for POST /. Emptiness is checked by the handler so it can answer 400 instead of 422."""

    question: str | None = Field(None, description="Question to answer from the document.")
    document_id: str | int | None = Field(None, description="Document whose chunks are searched.")


class RetrievedChunk(BaseModel):
    """One row returned by the match_chunks RPC."""

    id: str | int | None = None
    document_id: str | int | None = None
    chunk_text: str
    similarity: float


class ChatMessage(BaseModel):
    """A chat message as sent to and returned by the chat-completions API."""

    role: str
    content: str


class QueryResponse(BaseModel):
    """Response for POST /."""

    answer: ChatMessage = Field(..., description="First choice message from the model, unmodified.")
    chunks_used: int = Field(0, description="Number of retrieved chunks placed in the context.")
    similarity_scores: list[float] = Field(
        default_factory=list, description="Similarity of each retrieved chunk, in retrieval order."
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "answer": {"role": "assistant", "content": "The warranty lasts two years."},
                    "chunks_used": 2,
                    "similarity_scores": [0.88, 0.74],
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response from the query endpoint."""

    error: str
