"""
Utility package exports
"""

from app.utils.helpers import is_blank, null_to_empty, join_sections

__all__ = ["is_blank", "null_to_empty", "join_sections"]
