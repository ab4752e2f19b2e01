"""
API Response Models

Pydantic models for consistent API request/response structures.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class QueryRequest(BaseModel):
    """Request body for /api/query: the user query string only."""

    query: Optional[str] = Field(None, description="Customer question")


class QueryResponse(BaseModel):
    """Answer on success, error message on failure."""

    answer: Optional[str] = Field(None, description="Generated answer")
    error: Optional[str] = Field(None, description="Short error description")


class HistoryMessage(BaseModel):
    role: str
    content: str


class ConversationHistoryResponse(BaseModel):
    """Response for /api/load: the session's conversation window."""

    history: List[HistoryMessage] = Field(
        default_factory=list, description="Messages, oldest first"
    )
