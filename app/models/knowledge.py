"""
Knowledge Base Models

This module defines the data models for knowledge entries and the
categories derived from them.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.utils.helpers import is_blank


OTHER_CATEGORY = "Other"
NO_ISSUE = "(no issue)"


class KnowledgeEntry(BaseModel):
    """
    One Q&A record of the knowledge base.

    Entries without a category are grouped under the reserved "Other" category.
    """

    model_config = ConfigDict(frozen=True)

    category: Optional[str] = Field(None, description="Category name (e.g. 'loans')")
    issue: Optional[str] = Field(None, description="Short issue label within the category")
    customer_query: str = Field(..., description="Example customer question")
    agent_response: str = Field(..., description="Reference agent answer")

    @property
    def category_name(self) -> str:
        """Category this entry is grouped under ("Other" when blank)."""
        return OTHER_CATEGORY if is_blank(self.category) else self.category

    @property
    def is_uncategorized(self) -> bool:
        return is_blank(self.category)


class Category(BaseModel):
    """Category name plus the de-duplicated issues under it (for classification)."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Category name, 'Other' allowed")
    issues: List[str] = Field(
        default_factory=list, description="Issues in first-seen order, no duplicates"
    )
