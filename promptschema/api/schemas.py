"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field

# Re-export template-related models for API consumers
from promptschema.strategies.template_engine import ExtensionMetadata, RenderResult


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")


# =============================================================================
# Template Schemas
# =============================================================================


class SchemaRequest(BaseModel):
    """Request for generating a template's input schema."""

    template: str | None = Field(default=None, description="Django-style template source")


class SchemaResponse(BaseModel):
    """Generated input schema plus the raw extraction results."""

    input_schema: dict[str, Any] | None = Field(
        default=None,
        description="Draft-04 JSON Schema, null when no template was given",
    )
    variables: list[str] = Field(default_factory=list, description="Placeholder variables")
    loop_arrays: list[str] = Field(default_factory=list, description="Arrays iterated by for loops")


class RenderRequest(BaseModel):
    """Request for rendering a template."""

    template: str = Field(description="Django-style template source")
    template_variables: dict[str, Any] = Field(
        default_factory=dict,
        description="Variable names mapped to values",
    )


__all__ = [
    "ErrorResponse",
    "ExtensionMetadata",
    "RenderRequest",
    "RenderResult",
    "SchemaRequest",
    "SchemaResponse",
]
