"""
Context Catalog

Holds the named context schemas (logical customer-data "tables"). The full
catalog is only ever rendered for context classification; once a context has
been chosen, only that context's schema reaches the answering prompt.
"""

from typing import Iterable, List, Optional, Tuple

from app.models.context import ContextSchema
from app.utils import is_blank, null_to_empty


SINGLE_CONTEXT_HEADER = "## Customer context (relevant to this question)"
CATALOG_HEADER = "## Customer context catalog"
CATALOG_USAGE = "Each context is a logical 'table' of customer data."


class ContextCatalog:
    """Immutable catalog of context schemas keyed by unique name."""

    def __init__(self, contexts: Optional[Iterable[ContextSchema]] = None):
        self._contexts: Tuple[ContextSchema, ...] = tuple(contexts or ())
        seen = set()
        for ctx in self._contexts:
            if ctx.name in seen:
                raise ValueError(f"Duplicate context name in catalog: '{ctx.name}'")
            seen.add(ctx.name)

    @property
    def contexts(self) -> List[ContextSchema]:
        return list(self._contexts)

    def names(self) -> List[str]:
        return [ctx.name for ctx in self._contexts]

    def __len__(self) -> int:
        return len(self._contexts)

    def is_empty(self) -> bool:
        return not self._contexts

    def by_name(self, name: Optional[str]) -> Optional[ContextSchema]:
        """Exact, case-sensitive lookup. Returns None if not found."""
        if is_blank(name):
            return None
        for ctx in self._contexts:
            if ctx.name == name:
                return ctx
        return None

    def prompt_section_for_context(self, name: Optional[str]) -> str:
        """
        Render a single context's description, schema and example queries.

        Args:
            name: Context name selected by classification

        Returns:
            Section text, or "" if the context is unknown
        """
        ctx = self.by_name(name)
        if ctx is None:
            return ""
        return f"{SINGLE_CONTEXT_HEADER}\n\n{self._render_context(ctx)}"

    def full_catalog_prompt_section(self) -> str:
        """
        Render every context by name, description and example questions.

        Input to context classification only. Field lists and answering
        instructions are not included.
        """
        if not self._contexts:
            return ""
        parts = [f"{CATALOG_HEADER}\n\n{CATALOG_USAGE}\n\n"]
        for ctx in self._contexts:
            parts.append(f"### Context: {ctx.name}\n")
            parts.append(f"- Description: {null_to_empty(ctx.description)}\n")
            if ctx.example_queries:
                parts.append(f"- Example questions: {'; '.join(ctx.example_queries)}\n")
            parts.append("\n")
        return "".join(parts)

    @staticmethod
    def _render_context(ctx: ContextSchema) -> str:
        lines = [
            f"### Context: {ctx.name}\n",
            f"- Description: {null_to_empty(ctx.description)}\n",
        ]
        if ctx.schema_fields:
            lines.append("- Schema (fields):\n")
            for field in ctx.schema_fields:
                lines.append(f"  - {field.field}: {null_to_empty(field.description)}\n")
        if ctx.example_queries:
            lines.append(f"- Example queries: {'; '.join(ctx.example_queries)}\n")
        lines.append("\n")
        return "".join(lines)
