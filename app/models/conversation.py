"""
Conversation Models
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Role of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Role-tagged message exchanged with the completion service."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    content: str
