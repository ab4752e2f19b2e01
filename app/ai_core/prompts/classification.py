"""
Prompts for Category and Context Classification

Both classifiers ask the completion service for exactly one label from a
closed list. The customer's (history-augmented) question is sent as the user
message; these templates form the system message.
"""

from typing import List

from app.models.knowledge import Category


CATEGORY_CLASSIFICATION_INTRO = (
    "You are a classifier. For the customer message, reply with exactly one "
    "category name from the list below."
)
CATEGORY_CLASSIFICATION_OUTRO = "Reply with only the category name, nothing else."

CONTEXT_CLASSIFICATION_INTRO = (
    "You are a classifier. The customer will ask a question. Reply with exactly one "
    "context name from the list below: the context (database table) that best "
    "matches the question."
)
CONTEXT_CLASSIFICATION_OUTRO = "Reply with only the context name, nothing else."


def create_category_classification_prompt(categories: List[Category]) -> str:
    """
    Create the system prompt listing every category with its issues.

    Args:
        categories: Categories to choose from

    Returns:
        Formatted prompt for the LLM
    """
    prompt = f"{CATEGORY_CLASSIFICATION_INTRO}\n\n"
    for category in categories:
        prompt += f"Category: {category.type}\n"
        prompt += f"Issues: {', '.join(category.issues)}\n\n"
    prompt += CATEGORY_CLASSIFICATION_OUTRO
    return prompt


def create_context_classification_prompt(catalog_section: str) -> str:
    """Create the system prompt from the full context catalog section."""
    return (
        f"{CONTEXT_CLASSIFICATION_INTRO}\n\n"
        f"{catalog_section.strip()}\n\n"
        f"{CONTEXT_CLASSIFICATION_OUTRO}"
    )
