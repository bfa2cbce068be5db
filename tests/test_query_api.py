"""
Integration tests for the query endpoint.

The answer service is overridden with fakes so tests do not require the embeddings
worker, Supabase or the HF API.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.errors import EmbeddingError, GenerationError, SearchError
from app.main import app
from app.services.answer_service import AnswerService, get_answer_service


@pytest.fixture
def client(fakes) -> TestClient:
    app.dependency_overrides[get_answer_service] = lambda: AnswerService(
        embed=fakes.embed, search=fakes.search, generate=fakes.generate
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _assert_cors(response) -> None:
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


# --- method handling ---

@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE", "PURGE"])
def test_non_post_returns_405(client: TestClient, fakes, method: str) -> None:
    response = client.request(method, "/", json={"question": "q", "document_id": "d"})
    assert response.status_code == 405
    assert response.json() == {"error": "Only POST requests allowed"}
    _assert_cors(response)
    assert fakes.embed_calls == []


def test_preflight_returns_empty_body(client: TestClient, fakes) -> None:
    response = client.options("/")
    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)


def test_preflight_ignores_body(client: TestClient, fakes) -> None:
    response = client.request("OPTIONS", "/", content=b"{not json")
    assert response.status_code == 200
    assert response.content == b""
    assert fakes.embed_calls == []


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


# --- validation ---

@pytest.mark.parametrize(
    "body",
    [
        {},
        {"question": "What is covered?"},
        {"document_id": "doc-1"},
        {"question": "", "document_id": "doc-1"},
        {"question": "What is covered?", "document_id": ""},
        {"question": None, "document_id": "doc-1"},
        {"question": ["not", "text"], "document_id": "doc-1"},
        ["What is covered?", "doc-1"],
    ],
)
def test_missing_fields_returns_400(client: TestClient, fakes, body) -> None:
    response = client.post("/", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "question and document_id are required"}
    _assert_cors(response)
    assert fakes.embed_calls == []
    assert fakes.search_calls == []
    assert fakes.generate_calls == []


def test_invalid_json_returns_500(client: TestClient, fakes) -> None:
    response = client.post("/", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert "error" in response.json()
    assert fakes.embed_calls == []


# --- answers ---

def test_answer_with_three_chunks(client: TestClient, fakes) -> None:
    fakes.use_chunks(["A", "B", "C"], [0.91, 0.85, 0.72])
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 200
    assert response.json() == {
        "answer": {"role": "assistant", "content": "Fake answer."},
        "chunks_used": 3,
        "similarity_scores": [0.91, 0.85, 0.72],
    }
    _assert_cors(response)
    messages = fakes.generate_calls[0][0]
    assert "A\n\nB\n\nC" in messages[1]["content"]


def test_integer_document_id_is_forwarded(client: TestClient, fakes) -> None:
    fakes.use_chunks(["A"], [0.8])
    response = client.post("/", json={"question": "What?", "document_id": 42})
    assert response.status_code == 200
    assert fakes.search_calls[0][3] == 42


def test_no_matches_returns_structured_empty_answer(client: TestClient, fakes) -> None:
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 200
    assert response.json() == {
        "answer": {"role": "assistant", "content": "No relevant information found in the document."},
        "chunks_used": 0,
        "similarity_scores": [],
    }
    assert fakes.generate_calls == []


# --- downstream failures ---

def test_embedding_failure_returns_500(client: TestClient, fakes) -> None:
    fakes.embed_error = EmbeddingError("Failed to create question embedding")
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create question embedding"}
    _assert_cors(response)
    assert fakes.search_calls == []
    assert fakes.generate_calls == []


def test_search_failure_returns_500(client: TestClient, fakes) -> None:
    fakes.search_error = SearchError("function match_chunks does not exist")
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Search error: function match_chunks does not exist"}
    assert fakes.generate_calls == []


def test_generation_failure_returns_500(client: TestClient, fakes) -> None:
    fakes.use_chunks(["A"], [0.9])
    fakes.generate_error = GenerationError("HF API error 429: rate limited")
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 500
    assert response.json() == {"error": "HF API error 429: rate limited"}


def test_unexpected_exception_returns_500_with_message(client: TestClient, fakes) -> None:
    fakes.search_error = KeyError("similarity")
    response = client.post("/", json={"question": "What?", "document_id": "doc-1"})

    assert response.status_code == 500
    assert response.json() == {"error": str(KeyError("similarity"))}
