"""
Tests for the Knowledge Index: category derivation, filtering and rendering.
"""

import pytest
from pydantic import ValidationError

from app.ai_core.knowledge import KnowledgeIndex
from app.models.knowledge import KnowledgeEntry


def test_categories_sorted_with_deduplicated_issues(knowledge_index):
    categories = knowledge_index.categories()

    assert [c.type for c in categories] == ["Other", "balance", "loans"]
    loans = categories[2]
    assert loans.issues == ["Active loan", "EMI amount"]


def test_categories_group_blank_category_under_other(knowledge_index):
    other = knowledge_index.categories()[0]

    assert other.type == "Other"
    assert other.issues == ["Talk to agent", "(no issue)"]


def test_every_entry_belongs_to_exactly_one_category(knowledge_index):
    total = sum(
        len(knowledge_index.for_category(c.type)) for c in knowledge_index.categories()
    )
    assert total == len(knowledge_index)


def test_categories_empty_index():
    assert KnowledgeIndex().categories() == []


def test_for_category_other_returns_uncategorized(knowledge_index):
    other = knowledge_index.for_category("Other")

    assert [e.customer_query for e in other.entries] == ["I want a person.", "Hello?"]


def test_for_category_filters_exact_name(knowledge_index):
    loans = knowledge_index.for_category("loans")

    assert len(loans) == 3
    assert all(e.category == "loans" for e in loans.entries)
    assert knowledge_index.for_category("Loans").is_empty()


def test_for_category_unknown_or_blank_is_empty(knowledge_index):
    assert knowledge_index.for_category("billing").is_empty()
    assert knowledge_index.for_category("").is_empty()
    assert knowledge_index.for_category(None).is_empty()


def test_prompt_section_groups_alphabetically_then_other(knowledge_index):
    section = knowledge_index.to_prompt_section()

    assert section.startswith("## Knowledge base\n\n")
    balance_pos = section.index("### balance")
    loans_pos = section.index("### loans")
    other_pos = section.index("### Other")
    assert balance_pos < loans_pos < other_pos
    assert "- **Issue:** Active loan\n" in section
    assert "  - **Customer query:** Do I have an active loan?\n" in section
    assert "  - **Agent response:** Let me check your loan account.\n" in section


def test_prompt_section_renders_missing_issue_as_empty(knowledge_index):
    section = knowledge_index.to_prompt_section()

    assert "- **Issue:** \n  - **Customer query:** Hello?" in section


def test_prompt_section_empty_index_placeholder():
    section = KnowledgeIndex().to_prompt_section()

    assert section.strip() == "## Knowledge base\n(No entries loaded.)"


def test_entries_are_immutable():
    entry = KnowledgeEntry(customer_query="q", agent_response="a")
    with pytest.raises(ValidationError):
        entry.category = "x"
