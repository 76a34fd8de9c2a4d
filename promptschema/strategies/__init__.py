"""Concrete strategy implementations."""

from promptschema.strategies.template_engine import (
    DjangoTemplateRenderer,
    PromptTemplate,
    TemplateSchemaProvider,
)

__all__ = [
    "DjangoTemplateRenderer",
    "PromptTemplate",
    "TemplateSchemaProvider",
]
