"""
Query Classifier

Delegates two closed-set classifications to the completion service:

1. Knowledge category (narrows which Q&A entries are eligible)
2. Data context (gates which customer data is disclosed)

Each call must yield exactly one known label; any other text is treated as
"no match" (None), which is a normal outcome rather than an error. A reply
with no text at all is a MalformedServiceResponse.
"""

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from app.ai_core.context.context_catalog import ContextCatalog
from app.ai_core.exceptions import (
    ClassificationTransportError,
    CompletionTransportError,
    MalformedServiceResponse,
)
from app.ai_core.prompts.classification import (
    create_category_classification_prompt,
    create_context_classification_prompt,
)
from app.config import get_settings
from app.models.conversation import ChatMessage, Role
from app.models.knowledge import Category
from app.utils import is_blank

logger = logging.getLogger(__name__)

CLASSIFICATION_LOOKBACK_MESSAGES = 4


class CompletionService(Protocol):
    async def complete(
        self, messages: Sequence[ChatMessage], temperature: float, max_tokens: int
    ) -> str: ...


def build_classification_query(
    query: str,
    history: Sequence[ChatMessage],
    lookback: int = CLASSIFICATION_LOOKBACK_MESSAGES,
) -> str:
    """
    Build the text classified for a query, including recent conversation.

    Follow-ups like "What is the amount?" only make sense next to the previous
    exchange ("Do I have an active loan?"), so the last `lookback` messages are
    inlined ahead of the current question.

    Args:
        query: Current customer question
        history: Conversation so far, oldest first
        lookback: Maximum number of prior messages to include

    Returns:
        The raw query when there is no history, otherwise the
        "Recent conversation: ... Current question: ..." string
    """
    if not history or lookback <= 0:
        return query

    recent = list(history)[-lookback:]
    text = "Recent conversation:\n"
    for message in recent:
        text += f"{message.role}: {message.content}\n"
    text += f"\nCurrent question: {query}"
    return text


def match_label(reply: Optional[str], labels: Iterable[str]) -> Optional[str]:
    """
    Match a classifier reply against known labels.

    The reply is stripped and compared case-insensitively; the first matching
    label is returned in its canonical spelling.
    """
    if is_blank(reply):
        return None
    wanted = reply.strip().lower()
    for label in labels:
        if label.lower() == wanted:
            return label
    return None


class QueryClassifier:
    """Classifies a query into one knowledge category and one data context."""

    def __init__(
        self,
        completion: CompletionService,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        config = get_settings()
        self.completion = completion
        self.temperature = (
            temperature if temperature is not None else config.classify_temperature
        )
        self.max_tokens = max_tokens if max_tokens is not None else config.classify_max_tokens

    async def classify_category(
        self, query: str, categories: List[Category]
    ) -> Optional[str]:
        """
        Pick the category that best matches the query.

        No call is made for zero categories (None) or exactly one category
        (that category).

        Args:
            query: Classification query (see build_classification_query)
            categories: Categories derived from the knowledge index

        Returns:
            Category name, or None if the reply matched no category

        Raises:
            ClassificationTransportError: If the completion call failed
            MalformedServiceResponse: If the reply carried no text
        """
        if not categories:
            logger.debug("No categories loaded, skipping category classification")
            return None
        if len(categories) == 1:
            logger.debug(
                f"Single category '{categories[0].type}', skipping category classification"
            )
            return categories[0].type

        prompt = create_category_classification_prompt(categories)
        reply = await self._classify(prompt, query, "category")
        category = match_label(reply, (c.type for c in categories))
        if category is None:
            logger.info(f"Category reply matched no category: '{reply}'")
        return category

    async def classify_context(
        self, query: str, catalog: Optional[ContextCatalog]
    ) -> Optional[str]:
        """
        Pick the data context (table) the query is about.

        Only schemas, descriptions and example queries are sent; never customer
        data.

        Returns:
            Context name, or None for an empty catalog or an unmatched reply

        Raises:
            ClassificationTransportError: If the completion call failed
            MalformedServiceResponse: If the reply carried no text
        """
        if catalog is None or catalog.is_empty():
            logger.debug("No contexts loaded, skipping context classification")
            return None

        prompt = create_context_classification_prompt(
            catalog.full_catalog_prompt_section()
        )
        reply = await self._classify(prompt, query, "context")
        context = match_label(reply, catalog.names())
        if context is None:
            logger.info(f"Context reply matched no context: '{reply}'")
        return context

    async def _classify(self, system_prompt: str, query: str, kind: str) -> str:
        messages = [
            ChatMessage(role=Role.SYSTEM, content=system_prompt),
            ChatMessage(role=Role.USER, content=query),
        ]
        try:
            reply = await self.completion.complete(
                messages, temperature=self.temperature, max_tokens=self.max_tokens
            )
        except CompletionTransportError as e:
            logger.error(f"Error classifying {kind}: {str(e)}", exc_info=True)
            raise ClassificationTransportError(
                f"Failed to classify {kind}: {str(e)}"
            ) from e

        if not isinstance(reply, str):
            raise MalformedServiceResponse(
                f"Completion service returned no text while classifying {kind}"
            )
        return reply
