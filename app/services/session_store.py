"""
Session store for per-session conversation windows.

Windows live in memory only and do not persist across server restarts. The
number of sessions is bounded; the least recently used session is dropped
first.
"""

import logging
from collections import OrderedDict
from typing import List

from app.ai_core.conversation import ConversationWindow

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


class SessionStore:
    """Maps session ids to conversation windows (LRU-bounded)."""

    def __init__(self, max_sessions: int = 1000, max_messages: int = 10):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self.max_messages = max_messages
        self._windows: "OrderedDict[str, ConversationWindow]" = OrderedDict()

    def get_window(self, session_id: str = DEFAULT_SESSION_ID) -> ConversationWindow:
        """Return the session's window, creating it on first use."""
        window = self._windows.get(session_id)
        if window is not None:
            self._windows.move_to_end(session_id)
            return window

        window = ConversationWindow(max_messages=self.max_messages)
        self._windows[session_id] = window
        self._evict(keep=session_id)
        return window

    def _evict(self, keep: str) -> None:
        """
        Drop least recently used idle sessions while over max_sessions.

        The `keep` session and windows whose lock is held by a running query are
        skipped, so the store can stay over the bound until those queries finish.
        """
        excess = len(self._windows) - self.max_sessions
        if excess <= 0:
            return
        idle = [
            sid
            for sid, w in self._windows.items()
            if sid != keep and not w.lock.locked()
        ][:excess]
        for sid in idle:
            del self._windows[sid]
            logger.info(f"Evicted conversation window for session '{sid}'")
        if len(idle) < excess:
            logger.warning(
                f"Session store over capacity: {len(self._windows)} sessions, "
                f"remaining ones have queries in progress"
            )

    def has_session(self, session_id: str) -> bool:
        return session_id in self._windows

    def remove_session(self, session_id: str) -> None:
        self._windows.pop(session_id, None)

    def session_ids(self) -> List[str]:
        return list(self._windows)

    def __len__(self) -> int:
        return len(self._windows)
