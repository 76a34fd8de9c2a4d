"""Template engine strategies.

Implements template variable discovery, input schema generation and
Django-style prompt rendering.
"""

from promptschema.strategies.template_engine.extractor import (
    extract_for_loop_arrays,
    extract_variables,
    is_array_variable,
    is_loop_iterator,
)
from promptschema.strategies.template_engine.metadata import get_extension_metadata
from promptschema.strategies.template_engine.models import (
    ExtensionMetadata,
    PropertyDescriptor,
    RenderResult,
    SchemaDocument,
)
from promptschema.strategies.template_engine.prompt import PromptTemplate
from promptschema.strategies.template_engine.renderer import DjangoTemplateRenderer
from promptschema.strategies.template_engine.schema import (
    TemplateSchemaProvider,
    build_schema,
    build_schema_json,
    get_template_schema_as_json,
)

__all__ = [
    "DjangoTemplateRenderer",
    "ExtensionMetadata",
    "PromptTemplate",
    "PropertyDescriptor",
    "RenderResult",
    "SchemaDocument",
    "TemplateSchemaProvider",
    "build_schema",
    "build_schema_json",
    "extract_for_loop_arrays",
    "extract_variables",
    "get_extension_metadata",
    "get_template_schema_as_json",
    "is_array_variable",
    "is_loop_iterator",
]
