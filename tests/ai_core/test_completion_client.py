"""
Tests for the completion client: message conversion, error translation and
model caching. Chat models are faked; no network access.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from app.ai_core.exceptions import CompletionTransportError, MalformedServiceResponse
from app.ai_core.llm import CompletionClient, to_langchain_messages
from app.models.conversation import ChatMessage


MESSAGES = [
    ChatMessage(role="system", content="You are a classifier."),
    ChatMessage(role="user", content="Do I have a loan?"),
]


def test_to_langchain_messages_maps_roles():
    converted = to_langchain_messages(
        MESSAGES + [ChatMessage(role="assistant", content="Yes.")]
    )

    assert isinstance(converted[0], SystemMessage)
    assert isinstance(converted[1], HumanMessage)
    assert isinstance(converted[2], AIMessage)
    assert converted[1].content == "Do I have a loan?"


@pytest.mark.asyncio
async def test_complete_returns_generated_text():
    client = CompletionClient(
        llm_factory=lambda temperature, max_tokens: FakeListChatModel(responses=["loans"])
    )

    assert await client.complete(MESSAGES, temperature=0.0, max_tokens=30) == "loans"


@pytest.mark.asyncio
async def test_one_model_per_sampling_parameters():
    created = []

    def factory(temperature, max_tokens):
        created.append((temperature, max_tokens))
        return FakeListChatModel(responses=["ok"])

    client = CompletionClient(llm_factory=factory)
    await client.complete(MESSAGES, temperature=0.0, max_tokens=30)
    await client.complete(MESSAGES, temperature=0.0, max_tokens=30)
    await client.complete(MESSAGES, temperature=0.3, max_tokens=256)

    assert created == [(0.0, 30), (0.3, 256)]


@pytest.mark.asyncio
async def test_service_error_becomes_transport_error():
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=ConnectionError("connection refused"))
    client = CompletionClient(llm_factory=lambda t, m: llm)

    with pytest.raises(CompletionTransportError) as exc_info:
        await client.complete(MESSAGES, temperature=0.0, max_tokens=30)
    assert "connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_timeout_becomes_transport_error():
    async def slow(*args, **kwargs):
        await asyncio.sleep(1)

    llm = MagicMock()
    llm.ainvoke = slow
    client = CompletionClient(llm_factory=lambda t, m: llm, timeout=0.01)

    with pytest.raises(CompletionTransportError) as exc_info:
        await client.complete(MESSAGES, temperature=0.0, max_tokens=30)
    assert "timed out" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response", [SimpleNamespace(), SimpleNamespace(content=None), SimpleNamespace(content=[])]
)
async def test_missing_text_is_malformed_response(response):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=response)
    client = CompletionClient(llm_factory=lambda t, m: llm)

    with pytest.raises(MalformedServiceResponse):
        await client.complete(MESSAGES, temperature=0.0, max_tokens=30)


@pytest.mark.asyncio
async def test_model_setup_error_is_not_a_transport_error():
    def factory(temperature, max_tokens):
        raise ValueError("AICORE_CLIENT_ID is not configured")

    client = CompletionClient(llm_factory=factory)

    with pytest.raises(ValueError, match="AICORE_CLIENT_ID"):
        await client.complete(MESSAGES, temperature=0.0, max_tokens=30)
