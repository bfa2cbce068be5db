"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Supabase (vector store). The service key bypasses row-level security for the RPC.
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").strip().rstrip("/")
SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "").strip()
MATCH_FUNCTION: str = os.getenv("MATCH_FUNCTION", "match_chunks").strip() or "match_chunks"

# Embeddings worker: POST a JSON array of strings, get back one vector per string
EMBEDDINGS_URL: str = os.getenv("EMBEDDINGS_URL", "").strip()
EMBEDDINGS_API_KEY: str = os.getenv("EMBEDDINGS_API_KEY", "").strip()

# Hugging Face (chat completions via router)
HF_TOKEN: str = os.getenv("HF_TOKEN", "").strip()
HF_CHAT_URL: str = "https://router.huggingface.co/v1/chat/completions"
HF_LLM_MODEL: str = (
    os.getenv("HF_LLM_MODEL", "meta-llama/Llama-3.1-8B-Instruct").strip()
    or "meta-llama/Llama-3.1-8B-Instruct"
)

# OpenAI. When set, answers are generated with OpenAI instead of Hugging Face.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# Retrieval (tuning these affects answer grounding)
MATCH_THRESHOLD: float = 0.7
MATCH_COUNT: int = 3

# Generation
LLM_TEMPERATURE: float = 0.1
LLM_TOP_P: float = 0.9
LLM_MAX_TOKENS: int = 150

# API timeouts (seconds)
EMBED_API_TIMEOUT: float = 30.0
SEARCH_API_TIMEOUT: float = 30.0
LLM_API_TIMEOUT: float = 60.0

# CORS: "*" or a single pinned origin, e.g. https://docs.example.com
CORS_ALLOW_ORIGIN: str = os.getenv("CORS_ALLOW_ORIGIN", "*").strip() or "*"
CORS_ALLOW_METHODS: str = "POST, OPTIONS"
CORS_ALLOW_HEADERS: str = "Content-Type"
