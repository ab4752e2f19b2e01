"""
Conversation Window

Bounded, ordered log of (user, assistant) exchanges used to resolve follow-up
questions and to give the answer call conversational continuity.
"""

import asyncio
from typing import List, Tuple

from app.models.conversation import ChatMessage, Role

DEFAULT_MAX_MESSAGES = 10


class ConversationWindow:
    """
    Per-session conversation history.

    Messages are always appended and evicted in (user, assistant) pairs, so the
    window holds an even number of messages and never more than max_messages.
    Callers that read, call out and append must hold `lock` for the whole
    sequence.
    """

    def __init__(self, max_messages: int = DEFAULT_MAX_MESSAGES):
        if max_messages < 2:
            raise ValueError("max_messages must hold at least one exchange (>= 2)")
        self.max_messages = max_messages
        self.lock = asyncio.Lock()
        self._messages: List[ChatMessage] = []

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        """Snapshot of the window, oldest first."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def is_empty(self) -> bool:
        return not self._messages

    def recent(self, count: int) -> Tuple[ChatMessage, ...]:
        """The last `count` messages, oldest first."""
        if count <= 0:
            return ()
        return tuple(self._messages[-count:])

    def append_exchange(self, user_content: str, assistant_content: str) -> None:
        """Append one answered query and evict the oldest exchanges while over the bound."""
        user = ChatMessage(role=Role.USER, content=user_content)
        assistant = ChatMessage(role=Role.ASSISTANT, content=assistant_content)
        self._messages.extend((user, assistant))
        while len(self._messages) > self.max_messages:
            del self._messages[:2]

    def clear(self) -> None:
        self._messages.clear()
