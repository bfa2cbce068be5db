"""
API handlers: read the raw request, call the answer service, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Method dispatch, body validation,
CORS headers and exception-to-status mapping. Lives in the API layer so services
stay free of FastAPI/HTTP types.
"""

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_ALLOW_ORIGIN
from app.core.errors import RAGError, ServiceUnavailableError
from app.schemas.query import ErrorResponse, QueryRequest
from app.services.answer_service import AnswerService

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = "Only POST requests allowed"
MISSING_FIELDS = "question and document_id are required"


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=message).model_dump(),
        status_code=status_code,
        headers=cors_headers(),
    )


def parse_query(body: object) -> QueryRequest | None:
    """Return the request if both fields are present and truthy, else None."""
    if not isinstance(body, dict):
        return None
    try:
        query = QueryRequest.model_validate(body)
    except ValidationError:
        return None
    if not query.question or not query.document_id:
        return None
    return query


async def handle_query(request: Request, service: AnswerService) -> Response:
    """
    OPTIONS → 200 empty; other non-POST → 405; missing fields → 400;
    any failure after validation → 500 with the exception message.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())
    if request.method != "POST":
        return _error(405, METHOD_NOT_ALLOWED)

    try:
        query = parse_query(await request.json())
        if query is None:
            logger.info("[api:handle_query] rejected: missing question or document_id")
            return _error(400, MISSING_FIELDS)

        result = await service.answer(query.question, query.document_id)
        return JSONResponse(result.model_dump(), headers=cors_headers())
    except (RAGError, ServiceUnavailableError) as e:
        logger.warning("[api:handle_query] %s failure: %s", e.kind, e.message)
        return _error(500, e.message)
    except Exception as e:
        logger.exception("Answer pipeline failed")
        return _error(500, str(e))
