from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Support Router"
    debug: bool = False

    # OpenAI (via gen_ai_hub proxy)
    # No API key needed - uses gen_ai_hub proxy
    openai_model: str = "gpt-4o-mini"
    answer_temperature: float = 0.3
    answer_max_tokens: int = 256
    classify_temperature: float = 0.0  # Deterministic for label selection
    classify_max_tokens: int = 30

    # Completion calls
    request_timeout: float = 30.0  # Seconds, per call
    completion_max_retries: int = 0

    # Conversation
    max_history_messages: int = 10  # Last 5 exchanges
    classification_history_messages: int = 4  # Last 2 exchanges
    max_sessions: int = 1000

    # Config sources
    knowledge_path: str = "data/knowledge.json"
    context_schemas_path: str = "data/context_schemas.json"
    customer_data_path: str = ""  # Empty uses bundled demo data

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
