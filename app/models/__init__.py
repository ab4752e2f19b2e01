# Shared data models
from app.models.knowledge import KnowledgeEntry, Category, OTHER_CATEGORY
from app.models.context import SchemaField, ContextSchema, ContextCatalogConfig
from app.models.conversation import ChatMessage, Role
from app.models.api_responses import (
    QueryRequest,
    QueryResponse,
    HistoryMessage,
    ConversationHistoryResponse,
)

__all__ = [
    "KnowledgeEntry",
    "Category",
    "OTHER_CATEGORY",
    "SchemaField",
    "ContextSchema",
    "ContextCatalogConfig",
    "ChatMessage",
    "Role",
    "QueryRequest",
    "QueryResponse",
    "HistoryMessage",
    "ConversationHistoryResponse",
]
