"""Template engine domain models.

Pydantic models for generated input schemas, render results and
extension metadata. Kept here to avoid circular imports with the API layer.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from promptschema.interfaces.schema_provider import BaseSchemaProvider

DRAFT_04_SCHEMA_URI = "http://json-schema.org/draft-04/schema#"


class ArrayItems(BaseModel):
    """Item shape for loop arrays: free-form objects."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["object"] = "object"
    additional_properties: bool = Field(default=True, alias="additionalProperties")


class PropertyDescriptor(BaseModel):
    """Schema entry for one discovered template variable."""

    type: Literal["string", "array"] = Field(description="JSON Schema type of the variable")
    description: str = Field(description="Human readable origin of the variable")
    items: ArrayItems | None = Field(default=None, description="Item schema for array variables")


class SchemaDocument(BaseModel):
    """Draft-04 JSON Schema describing a template's expected input object."""

    model_config = ConfigDict(populate_by_name=True)

    schema_uri: str = Field(default=DRAFT_04_SCHEMA_URI, alias="$schema")
    type: Literal["object"] = "object"
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Dump to the plain JSON Schema shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RenderResult(BaseModel):
    """Outcome of rendering a prompt template."""

    rendered_prompt: str = Field(description="Rendered output text")
    missing_variables: list[str] = Field(
        default_factory=list,
        description="Variables the template references that were not supplied",
    )


class ExtensionMetadata(BaseModel):
    """Metadata a host UI uses to present the prompt template component."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    name: str
    type: str
    version: str
    title: str
    description: str
    schema_provider: BaseSchemaProvider | None = Field(default=None, exclude=True)
    dynamic_inputs: dict[str, Any] | None = Field(default=None, alias="dynamicInputs")
