"""
Shared fixtures: sample knowledge, catalog, customer data and a scripted
completion service that replays queued replies.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from app.ai_core.context import ContextCatalog, CustomerContextStore
from app.ai_core.knowledge import KnowledgeIndex
from app.models.context import ContextSchema, SchemaField
from app.models.knowledge import KnowledgeEntry


class ScriptedCompletion:
    """
    Fake completion service.

    Each call pops the next queued reply; queued exceptions are raised instead.
    Every call is recorded so tests can assert on prompts and parameters.
    """

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    async def complete(self, messages, temperature, max_tokens):
        self.calls.append(
            SimpleNamespace(
                messages=list(messages), temperature=temperature, max_tokens=max_tokens
            )
        )
        if not self.replies:
            raise AssertionError("Unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def scripted_completion():
    """Factory: scripted_completion("loans", "balance_and_usage", ...)."""

    def _make(*replies):
        return ScriptedCompletion(replies)

    return _make


@pytest.fixture
def knowledge_entries():
    return [
        KnowledgeEntry(
            category="loans",
            issue="Active loan",
            customer_query="Do I have an active loan?",
            agent_response="Let me check your loan account.",
        ),
        KnowledgeEntry(
            category="balance",
            issue="Check balance",
            customer_query="What is my balance?",
            agent_response="Your balance is shown in your account.",
        ),
        KnowledgeEntry(
            category="loans",
            issue="EMI amount",
            customer_query="What is my EMI?",
            agent_response="Your EMI is listed on your loan account.",
        ),
        KnowledgeEntry(
            category="loans",
            issue="Active loan",
            customer_query="Is my loan still running?",
            agent_response="I can check whether your loan is active.",
        ),
        KnowledgeEntry(
            category=None,
            issue="Talk to agent",
            customer_query="I want a person.",
            agent_response="I will transfer you to an agent.",
        ),
        KnowledgeEntry(
            category="  ",
            issue=None,
            customer_query="Hello?",
            agent_response="Hi, how can I help?",
        ),
    ]


@pytest.fixture
def knowledge_index(knowledge_entries):
    return KnowledgeIndex(knowledge_entries)


@pytest.fixture
def single_category_index():
    return KnowledgeIndex(
        [
            KnowledgeEntry(
                category="general",
                issue="Check balance",
                customer_query="What is my balance?",
                agent_response="Your balance is shown in your account.",
            )
        ]
    )


@pytest.fixture
def catalog():
    return ContextCatalog(
        [
            ContextSchema(
                name="balance_and_usage",
                description="Balance, plan and usage.",
                schema_fields=[
                    SchemaField(field="balance", description="Main account balance"),
                    SchemaField(field="plan_name", description="Current plan"),
                ],
                example_queries=["What is my balance?", "How much data is left?"],
            ),
            ContextSchema(
                name="loans",
                description="Device loans and EMIs.",
                schema_fields=[
                    SchemaField(field="outstanding_amount", description="Amount still owed"),
                    SchemaField(field="emi_amount", description="Monthly instalment"),
                ],
                example_queries=["Do I have an active loan?", "What is my EMI?"],
            ),
        ]
    )


@pytest.fixture
def customer_store():
    return CustomerContextStore(
        {
            "balance_and_usage": {
                "balance": "₹47",
                "plan_name": "Standard (5GB/day, 56-day)",
                "active_offers": "",
            },
            "loans": {
                "has_active_loan": "true",
                "outstanding_amount": "₹4,200",
                "emi_amount": "₹700",
            },
        }
    )
