from app.ai_core.llm.completion_client import CompletionClient, to_langchain_messages

__all__ = ["CompletionClient", "to_langchain_messages"]
