"""
Context Schema Models

A context is a logical "table" of customer data (e.g. balance_and_usage, loans).
Schemas describe the shape of that data; they never carry values.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SchemaField(BaseModel):
    """A single field of a context schema."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Field name as stored in customer data")
    description: Optional[str] = Field(None, description="What the field means")


class ContextSchema(BaseModel):
    """Named data-context schema with field descriptions and example queries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Unique context name")
    description: Optional[str] = Field(None, description="What this context covers")
    schema_fields: List[SchemaField] = Field(
        default_factory=list,
        alias="schema",
        description="Ordered (field, description) pairs",
    )
    example_queries: List[str] = Field(
        default_factory=list,
        description="Questions that should be answered from this context",
    )

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("context name must not be blank")
        return value


class ContextCatalogConfig(BaseModel):
    """JSON root of the context catalog file: {"contexts": [...]}."""

    contexts: List[ContextSchema] = Field(default_factory=list)
