from app.ai_core.knowledge.knowledge_index import KnowledgeIndex

__all__ = ["KnowledgeIndex"]
