"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

from fastapi import APIRouter, Depends, Request, Response

from app.api.handlers import handle_query
from app.schemas.query import ErrorResponse, QueryResponse
from app.services.answer_service import AnswerService, get_answer_service

router = APIRouter()


# --- System ---

@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Query ---

@router.post(
    "/",
    tags=["query"],
    summary="Answer a question about a document",
    description=(
        "Body: {question, document_id}. Embeds the question, retrieves up to 3 chunks of the document "
        "with similarity >= 0.7 and answers from them. 400 on missing fields, 500 on any downstream failure."
    ),
    responses={
        200: {"model": QueryResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def post_query(
    request: Request, service: AnswerService = Depends(get_answer_service)
) -> Response:
    return await handle_query(request, service)


async def other_methods(request: Request) -> Response:
    """OPTIONS preflight and the 405 for every other method, including non-standard verbs."""
    return await handle_query(request, get_answer_service())


# methods=None matches any verb; POST is taken by the route above.
router.add_route("/", other_methods, methods=None, include_in_schema=False)
