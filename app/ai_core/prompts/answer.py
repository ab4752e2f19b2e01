"""
Prompts for the Answer Call

Builds the system prompt in a fixed section order:

1. role and rules
2. knowledge section (possibly narrowed to one category)
3. catalog description of the selected context (omitted without a context)
4. customer data of the selected context (omitted when empty)
5. safety suffix

Knowledge always precedes context data and the safety suffix is always last.
"""

from typing import Optional

from app.ai_core.context.context_catalog import ContextCatalog
from app.ai_core.knowledge.knowledge_index import KnowledgeIndex
from app.utils import is_blank, join_sections


ROLE_AND_RULES = (
    "You are a friendly telecom customer support agent. Answer only using the "
    "information provided below. Keep replies concise and helpful (1-3 sentences). "
    "Match the customer's question to the closest customer_query and respond in the "
    "same style as the corresponding agent_response. If the answer is not in the "
    "provided data, say you don't have that information and suggest calling support "
    "or checking the app."
)

SAFETY = (
    "Do not make up plan names, prices, or policies. If the customer asks something "
    "not covered above, say you don't have that information and offer to transfer "
    "to an agent or suggest the app/website."
)


def build_system_prompt(
    knowledge: KnowledgeIndex,
    catalog: Optional[ContextCatalog],
    selected_context: Optional[str],
    customer_data_section: Optional[str],
) -> str:
    """
    Build the answering system prompt for a single selected context.

    Args:
        knowledge: Knowledge index, already narrowed to the classified category
        catalog: Context catalog (only the selected context is rendered)
        selected_context: Classified context name, or None
        customer_data_section: Rendered customer data for that context only

    Returns:
        System prompt with sections separated by one blank line
    """
    catalog_section = None
    if catalog is not None and not is_blank(selected_context):
        catalog_section = catalog.prompt_section_for_context(selected_context)

    return join_sections(
        [
            ROLE_AND_RULES,
            knowledge.to_prompt_section(),
            catalog_section,
            customer_data_section,
            SAFETY,
        ]
    )
