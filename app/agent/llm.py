"""
Answer LLM: OpenAI (when configured) or Hugging Face router.
When OPENAI_API_KEY is set, uses OpenAI chat completions; otherwise uses the HF router.
There is no fallback between providers: one attempt, failures raise GenerationError.
"""

import logging
from typing import Any

import httpx
from openai import AsyncOpenAI, OpenAIError

from app.core.config import (
    HF_CHAT_URL,
    HF_LLM_MODEL,
    HF_TOKEN,
    LLM_API_TIMEOUT,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from app.core.errors import GenerationError, ServiceUnavailableError
from app.schemas.query import ChatMessage

logger = logging.getLogger(__name__)


async def _call_openai(
    messages: list[dict[str, str]],
    temperature: float,
    top_p: float,
    max_tokens: int,
) -> ChatMessage:
    """Call OpenAI chat completions. Returns the first choice's message."""
    client = AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=LLM_API_TIMEOUT)
    try:
        response = await client.chat.completions.create(
            model=OPENAI_LLM_MODEL,
            messages=messages,
            temperature=temperature,
            top_p=top_p,
            max_tokens=max_tokens,
        )
    except OpenAIError as e:
        raise GenerationError(str(e)) from e
    msg = response.choices[0].message if response.choices else None
    if msg is None:
        raise GenerationError("Chat completion returned no choices")
    logger.info("[llm:openai] OUT response_len=%d", len(msg.content or ""))
    return ChatMessage(role=msg.role, content=msg.content or "")


async def _call_hf(
    messages: list[dict[str, str]],
    temperature: float,
    top_p: float,
    max_tokens: int,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatMessage:
    """Call Hugging Face router chat completions. Returns the first choice's message."""
    if not HF_TOKEN:
        raise ServiceUnavailableError(
            "HF_TOKEN must be set in .env. Get a token from https://huggingface.co/settings/tokens"
        )
    headers = {"Authorization": f"Bearer {HF_TOKEN}", "Content-Type": "application/json"}
    payload: dict[str, Any] = {
        "model": HF_LLM_MODEL,
        "messages": messages,
        "temperature": temperature,
        "top_p": top_p,
        "max_tokens": max_tokens,
    }
    try:
        async with httpx.AsyncClient(timeout=LLM_API_TIMEOUT, transport=transport) as client:
            response = await client.post(HF_CHAT_URL, json=payload, headers=headers)
    except httpx.HTTPError as e:
        raise GenerationError(f"HF request failed: {e}") from e
    if response.status_code != 200:
        logger.warning("[llm:hf] HF LLM error %s: %s", response.status_code, response.text[:200])
        raise GenerationError(f"HF API error {response.status_code}: {response.text[:200]}")

    data = response.json()
    choices = (data.get("choices") or []) if isinstance(data, dict) else []
    if not choices or not isinstance(choices[0], dict) or not isinstance(choices[0].get("message"), dict):
        raise GenerationError("Chat completion returned no choices")
    msg = choices[0]["message"]
    logger.info("[llm:hf] OUT response_len=%d", len(msg.get("content") or ""))
    return ChatMessage(role=msg.get("role") or "assistant", content=msg.get("content") or "")


async def chat_completion(
    messages: list[dict[str, str]],
    temperature: float,
    top_p: float,
    max_tokens: int,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatMessage:
    """
    Generate an answer for a list of {role, content} messages.
    Uses OpenAI when OPENAI_API_KEY is set, else Hugging Face. The message is returned as-is.
    """
    logger.info(
        "[llm] IN  messages=%d temperature=%.2f top_p=%.2f max_tokens=%d",
        len(messages), temperature, top_p, max_tokens,
    )
    if OPENAI_API_KEY:
        return await _call_openai(messages, temperature, top_p, max_tokens)
    return await _call_hf(messages, temperature, top_p, max_tokens, transport=transport)
