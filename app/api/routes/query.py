"""
Query API Routes

Endpoints:
1. POST /api/query - Answer a customer question
2. GET /api/load - Conversation history of the session
3. GET /api - Usage information

Sessions are selected with the optional X-Session-Id header; history is kept on
the backend and never accepted from the client.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from app.ai_core.exceptions import RoutingError
from app.config import get_settings
from app.models.api_responses import (
    ConversationHistoryResponse,
    HistoryMessage,
    QueryRequest,
    QueryResponse,
)
from app.services.config_loader import (
    load_context_catalog,
    load_customer_data_or_demo,
    load_knowledge,
)
from app.services.query_router import QueryRouter
from app.services.session_store import DEFAULT_SESSION_ID, SessionStore
from app.utils import is_blank

logger = logging.getLogger(__name__)
router = APIRouter()

GENERIC_FAILURE_MESSAGE = "Sorry, we could not answer your question right now. Please try again later."


@lru_cache
def get_query_router() -> QueryRouter:
    """Build the router once from the configured sources."""
    settings = get_settings()
    return QueryRouter(
        knowledge=load_knowledge(settings.knowledge_path),
        catalog=load_context_catalog(settings.context_schemas_path),
        customer_data=load_customer_data_or_demo(settings),
    )


@lru_cache
def get_session_store() -> SessionStore:
    settings = get_settings()
    return SessionStore(
        max_sessions=settings.max_sessions,
        max_messages=settings.max_history_messages,
    )


def _session_id(x_session_id: Optional[str]) -> str:
    return DEFAULT_SESSION_ID if is_blank(x_session_id) else x_session_id.strip()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=QueryResponse(error=message).model_dump()
    )


@router.get("")
async def api_home():
    return {
        "message": "Support Router API",
        "usage": 'POST /api/query with JSON body: {"query": "your question"}',
    }


@router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    x_session_id: Optional[str] = Header(None),
    query_router: QueryRouter = Depends(get_query_router),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Answer a customer question.

    Example request body:
    ```json
    {
        "query": "Do I have an active loan?"
    }
    ```

    Example response:
    ```json
    {
        "answer": "Yes, you have an active device loan with ₹4,200 outstanding.",
        "error": null
    }
    ```

    Failures return the same shape with "answer": null and a short "error"
    (400 for a blank query, 502 when the completion service fails).
    """
    if is_blank(request.query):
        return _error_response(400, "Missing or empty 'query' in request body.")

    session_id = _session_id(x_session_id)
    window = sessions.get_window(session_id)
    logger.info(f"Query request: session='{session_id}', history={len(window)} messages")

    try:
        answer = await query_router.answer(request.query.strip(), window)
    except RoutingError as e:
        logger.error(f"Error in query endpoint: {str(e)}", exc_info=True)
        return _error_response(502, f"{GENERIC_FAILURE_MESSAGE} ({type(e).__name__})")

    return QueryResponse(answer=answer)


@router.get("/load", response_model=ConversationHistoryResponse)
async def load_history(
    x_session_id: Optional[str] = Header(None),
    sessions: SessionStore = Depends(get_session_store),
):
    """Return the session's conversation window, oldest message first."""
    session_id = _session_id(x_session_id)
    if not sessions.has_session(session_id):
        return ConversationHistoryResponse()

    window = sessions.get_window(session_id)
    return ConversationHistoryResponse(
        history=[
            HistoryMessage(role=m.role, content=m.content) for m in window.messages
        ]
    )
