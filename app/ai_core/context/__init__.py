from app.ai_core.context.context_catalog import ContextCatalog
from app.ai_core.context.customer_store import CustomerContextStore, demo_customer_store

__all__ = ["ContextCatalog", "CustomerContextStore", "demo_customer_store"]
