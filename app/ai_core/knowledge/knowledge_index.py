"""
Knowledge Index

Groups flat Q&A entries into named categories, filters by category and
renders the knowledge section of the system prompt.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from app.models.knowledge import KnowledgeEntry, Category, OTHER_CATEGORY, NO_ISSUE
from app.utils import is_blank, null_to_empty


KNOWLEDGE_HEADER = "## Knowledge base"
EMPTY_KNOWLEDGE_PLACEHOLDER = "(No entries loaded.)"
KNOWLEDGE_USAGE = (
    "Use the following Q&A entries to answer the customer. Match their question "
    "to the closest customer_query and respond in the same style as agent_response. "
    "If multiple entries could apply, pick the best match. If none match well, say "
    "you don't have that information and suggest support or the app."
)


class KnowledgeIndex:
    """
    Immutable collection of knowledge entries.

    Categories are derived on every call to categories(); nothing is cached, so
    the result is always a pure function of the entries.
    """

    def __init__(self, entries: Optional[Iterable[KnowledgeEntry]] = None):
        self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries or ())

    @property
    def entries(self) -> List[KnowledgeEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def categories(self) -> List[Category]:
        """
        Group entries by category and return one Category per group.

        Uncategorized entries are grouped under "Other" and entries without an
        issue contribute the "(no issue)" placeholder.

        Returns:
            Categories sorted by name, issues de-duplicated in first-seen order
        """
        category_to_issues: Dict[str, List[str]] = {}
        for entry in self._entries:
            issue = NO_ISSUE if is_blank(entry.issue) else entry.issue
            issues = category_to_issues.setdefault(entry.category_name, [])
            if issue not in issues:
                issues.append(issue)

        return [
            Category(type=name, issues=issues)
            for name, issues in sorted(category_to_issues.items())
        ]

    def for_category(self, name: Optional[str]) -> "KnowledgeIndex":
        """
        Return a new index containing only entries of the given category.

        "Other" selects entries with no category. Unknown or blank names give
        an empty index.
        """
        if is_blank(name):
            return KnowledgeIndex()
        if name == OTHER_CATEGORY:
            return KnowledgeIndex(e for e in self._entries if e.is_uncategorized)
        return KnowledgeIndex(e for e in self._entries if e.category == name)

    def to_prompt_section(self) -> str:
        """Render entries grouped by category (alphabetical), uncategorized last as "Other"."""
        if not self._entries:
            return f"{KNOWLEDGE_HEADER}\n{EMPTY_KNOWLEDGE_PLACEHOLDER}\n"

        by_category: Dict[str, List[KnowledgeEntry]] = {}
        uncategorized: List[KnowledgeEntry] = []
        for entry in self._entries:
            if entry.is_uncategorized:
                uncategorized.append(entry)
            else:
                by_category.setdefault(entry.category, []).append(entry)

        parts = [f"{KNOWLEDGE_HEADER}\n\n{KNOWLEDGE_USAGE}\n\n"]
        for category in sorted(by_category):
            parts.append(self._render_group(category, by_category[category]))
        # Entries explicitly categorized "Other" render with the sorted groups above
        if uncategorized:
            parts.append(self._render_group(OTHER_CATEGORY, uncategorized))
        return "".join(parts)

    @staticmethod
    def _render_group(title: str, entries: List[KnowledgeEntry]) -> str:
        lines = [f"### {title}\n\n"]
        for entry in entries:
            lines.append(f"- **Issue:** {null_to_empty(entry.issue)}\n")
            lines.append(f"  - **Customer query:** {entry.customer_query}\n")
            lines.append(f"  - **Agent response:** {entry.agent_response}\n\n")
        return "".join(lines)
