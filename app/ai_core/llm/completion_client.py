"""
Completion Client

Adapter over the external text-completion service. Takes role-tagged messages
plus sampling parameters and returns generated text, translating every failure
into the routing exception hierarchy.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, Sequence, Tuple

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.ai_core.exceptions import CompletionTransportError, MalformedServiceResponse
from app.config import get_settings
from app.models.conversation import ChatMessage, Role

logger = logging.getLogger(__name__)

# (temperature, max_tokens) -> chat model
ChatModelFactory = Callable[[float, int], BaseChatModel]


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    """Convert role-tagged messages to LangChain message objects."""
    converted: list[BaseMessage] = []
    for message in messages:
        if message.role == Role.SYSTEM:
            converted.append(SystemMessage(content=message.content))
        elif message.role == Role.ASSISTANT:
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


class CompletionClient:
    """
    Completion service client backed by a LangChain chat model.

    By default models are created through the gen_ai_hub proxy; tests and
    alternative deployments pass their own `llm_factory`. One model instance is
    kept per (temperature, max_tokens) pair.
    """

    def __init__(
        self,
        llm_factory: Optional[ChatModelFactory] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            llm_factory: Builds a chat model for (temperature, max_tokens)
            timeout: Seconds allowed per call (defaults to settings.request_timeout)
        """
        config = get_settings()
        self.model = config.openai_model
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.max_retries = config.completion_max_retries
        self._llm_factory = llm_factory or self._proxy_llm
        self._proxy_client = None
        self._llms: Dict[Tuple[float, int], BaseChatModel] = {}

    def _proxy_llm(self, temperature: float, max_tokens: int) -> BaseChatModel:
        from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
        from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

        if self._proxy_client is None:
            self._proxy_client = get_proxy_client("gen-ai-hub")
        return ChatOpenAI(
            proxy_model_name=self.model,
            proxy_client=self._proxy_client,
            temperature=temperature,
            max_tokens=max_tokens,
            request_timeout=self.timeout,
            max_retries=self.max_retries,
        )

    def _get_llm(self, temperature: float, max_tokens: int) -> BaseChatModel:
        key = (temperature, max_tokens)
        if key not in self._llms:
            self._llms[key] = self._llm_factory(temperature, max_tokens)
            logger.debug(
                f"Created chat model {self.model} (temperature={temperature}, max_tokens={max_tokens})"
            )
        return self._llms[key]

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Send messages to the completion service and return the generated text.

        Errors raised while building the chat model (missing gen_ai_hub, bad
        proxy credentials) are configuration errors and propagate unchanged.

        Args:
            messages: Role-tagged messages, system prompt first
            temperature: Sampling temperature
            max_tokens: Maximum output tokens

        Returns:
            Generated text

        Raises:
            CompletionTransportError: Service unreachable, timed out or failed
            MalformedServiceResponse: Response carries no text content
        """
        llm = self._get_llm(temperature, max_tokens)
        try:
            response = await asyncio.wait_for(
                llm.ainvoke(to_langchain_messages(messages)), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise CompletionTransportError(
                f"Completion service timed out after {self.timeout}s"
            ) from e
        except Exception as e:
            raise CompletionTransportError(
                f"Failed to call completion service: {str(e)}"
            ) from e

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            raise MalformedServiceResponse("No message content in completion response")
        return content
