"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

from typing import Iterable, Optional


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def null_to_empty(value: Optional[str]) -> str:
    return value if value is not None else ""


def join_sections(sections: Iterable[Optional[str]]) -> str:
    """
    Join prompt sections with exactly one blank line between them.

    Blank sections are dropped and each section is stripped of surrounding
    whitespace, so omitted sections leave no stray separators.

    Args:
        sections: Rendered sections in final order (None or blank to omit)

    Returns:
        Combined text
    """
    kept = [section.strip() for section in sections if not is_blank(section)]
    return "\n\n".join(kept)
