"""Prompts package."""

from app.ai_core.prompts.answer import ROLE_AND_RULES, SAFETY, build_system_prompt
from app.ai_core.prompts.classification import (
    create_category_classification_prompt,
    create_context_classification_prompt,
)

__all__ = [
    "ROLE_AND_RULES",
    "SAFETY",
    "build_system_prompt",
    "create_category_classification_prompt",
    "create_context_classification_prompt",
]
