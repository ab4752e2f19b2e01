from app.ai_core.conversation.window import ConversationWindow, DEFAULT_MAX_MESSAGES

__all__ = ["ConversationWindow", "DEFAULT_MAX_MESSAGES"]
