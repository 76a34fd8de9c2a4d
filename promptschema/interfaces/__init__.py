"""Abstract base classes for schema generation and rendering strategies."""

from promptschema.interfaces.renderer import BaseTemplateRenderer, TemplateRenderError
from promptschema.interfaces.schema_provider import BaseSchemaProvider

__all__ = [
    "BaseSchemaProvider",
    "BaseTemplateRenderer",
    "TemplateRenderError",
]
