"""
Query Router Service

Answers one customer query end to end:

1. Build the classification query from the question + recent conversation
2. Classify knowledge category and narrow the knowledge index
3. Classify data context against the full catalog
4. Fetch customer data for that context only
5. Assemble the system prompt
6. Call the completion service with the conversation window
7. Append the exchange to the window
"""

import logging
from typing import Optional

from app.ai_core.classification import QueryClassifier, build_classification_query
from app.ai_core.classification.classifier import CompletionService
from app.ai_core.context import ContextCatalog, CustomerContextStore
from app.ai_core.conversation import ConversationWindow
from app.ai_core.exceptions import (
    AnswerTransportError,
    CompletionTransportError,
    MalformedServiceResponse,
)
from app.ai_core.knowledge import KnowledgeIndex
from app.ai_core.llm import CompletionClient
from app.ai_core.prompts import build_system_prompt
from app.config import get_settings
from app.models.conversation import ChatMessage, Role

logger = logging.getLogger(__name__)


class QueryRouter:
    """
    Routes a query to the right knowledge slice and data context.

    Holds read-only knowledge and catalog plus the customer data store; owns
    no conversation state. Windows are passed in per call.
    """

    def __init__(
        self,
        knowledge: KnowledgeIndex,
        catalog: ContextCatalog,
        customer_data: Optional[CustomerContextStore] = None,
        completion: Optional[CompletionService] = None,
        classifier: Optional[QueryClassifier] = None,
    ):
        config = get_settings()
        self.knowledge = knowledge
        self.catalog = catalog
        self.customer_data = customer_data or CustomerContextStore()
        self.completion = completion or CompletionClient()
        self.classifier = classifier or QueryClassifier(self.completion)
        self.answer_temperature = config.answer_temperature
        self.answer_max_tokens = config.answer_max_tokens
        self.classification_lookback = config.classification_history_messages

    async def answer(self, query: str, window: ConversationWindow) -> str:
        """
        Answer a query, using and updating the session's conversation window.

        The window lock is held for the whole pipeline so concurrent queries on
        the same session cannot interleave. On any failure the window is left
        exactly as it was.

        Args:
            query: Customer question
            window: Conversation window of the caller's session

        Returns:
            Generated answer

        Raises:
            ClassificationTransportError: Completion call failed while classifying
            AnswerTransportError: Completion call failed while answering
            MalformedServiceResponse: Completion service returned no text
        """
        async with window.lock:
            history = window.messages
            classification_query = build_classification_query(
                query, history, lookback=self.classification_lookback
            )

            knowledge = await self._narrow_knowledge(classification_query)

            selected_context = await self.classifier.classify_context(
                classification_query, self.catalog
            )
            logger.info(f"Context: {selected_context or '(none)'}")

            customer_data_section = None
            if selected_context:
                customer_data_section = self.customer_data.prompt_section_for_context(
                    selected_context
                )

            system_prompt = build_system_prompt(
                knowledge, self.catalog, selected_context, customer_data_section
            )

            messages = [ChatMessage(role=Role.SYSTEM, content=system_prompt)]
            messages.extend(history)
            messages.append(ChatMessage(role=Role.USER, content=query))

            try:
                reply = await self.completion.complete(
                    messages,
                    temperature=self.answer_temperature,
                    max_tokens=self.answer_max_tokens,
                )
            except CompletionTransportError as e:
                logger.error(f"Error in answer call: {str(e)}", exc_info=True)
                raise AnswerTransportError(f"Failed to answer query: {str(e)}") from e

            if not isinstance(reply, str):
                raise MalformedServiceResponse("Completion service returned no answer text")

            window.append_exchange(query, reply)
            return reply

    async def _narrow_knowledge(self, classification_query: str) -> KnowledgeIndex:
        """
        Narrow the knowledge index to the classified category.

        Falls back to the full index when classification matches nothing or the
        matched category has no entries. This can expose entries of other
        categories to the answer call; it is kept as the routing policy.
        """
        categories = self.knowledge.categories()
        category = await self.classifier.classify_category(
            classification_query, categories
        )
        logger.info(f"Category: {category or '(none)'}")

        if not category:
            return self.knowledge

        filtered = self.knowledge.for_category(category)
        if filtered.is_empty():
            logger.info(f"Category '{category}' has no entries, using full knowledge")
            return self.knowledge
        return filtered
