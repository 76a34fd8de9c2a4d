"""Template schema provider strategy.

Builds a draft-04 JSON Schema for the variables a template expects, so a
host can present one input field per variable before rendering.
"""

import json
import logging
from typing import Any

from promptschema.interfaces.schema_provider import BaseSchemaProvider
from promptschema.strategies.template_engine.extractor import (
    extract_for_loop_arrays,
    extract_variables,
    is_array_variable,
)
from promptschema.strategies.template_engine.models import (
    ArrayItems,
    PropertyDescriptor,
    SchemaDocument,
)

logger = logging.getLogger(__name__)

EMPTY_SCHEMA_JSON = "{}"


def _describe(variable: str, for_loop_arrays: list[str]) -> PropertyDescriptor:
    if is_array_variable(variable, for_loop_arrays):
        return PropertyDescriptor(
            type="array",
            description="Array variable used in for loop: {{ " + variable + " }}",
            items=ArrayItems(),
        )
    return PropertyDescriptor(
        type="string",
        description="Template variable: {{ " + variable + " }}",
    )


def build_schema(template: str) -> SchemaDocument:
    """Build the input schema for a template.

    Loop arrays that never appear in a placeholder are appended after the
    placeholder variables, so every loop source gets an ``array`` entry.

    Args:
        template: The template source text.

    Returns:
        The schema document. An empty template yields empty properties.
    """
    variables = extract_variables(template)
    for_loop_arrays = extract_for_loop_arrays(template)

    for array in for_loop_arrays:
        if array not in variables:
            variables.append(array)

    properties = {
        variable: _describe(variable, for_loop_arrays) for variable in variables
    }
    return SchemaDocument(properties=properties)


def serialize_schema(schema: dict[str, Any]) -> str:
    """Serialize a schema dict to canonical JSON (sorted keys, compact, UTF-8 names)."""
    return json.dumps(schema, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def build_schema_json(template: Any) -> str:
    """Build the input schema for a template as JSON text.

    Best effort: never raises.

    Args:
        template: The template source text. Anything other than a string
            is treated as an absent template.

    Returns:
        The canonical JSON schema, or ``"{}"`` when the template is absent
        or the schema cannot be serialized.
    """
    if not isinstance(template, str):
        return EMPTY_SCHEMA_JSON

    try:
        return serialize_schema(build_schema(template).to_dict())
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to serialize template schema: {e}")
        return EMPTY_SCHEMA_JSON


class TemplateSchemaProvider(BaseSchemaProvider):
    """Generates the input schema from the ``template`` setting."""

    def get_input_schema(self, settings: dict[str, Any]) -> dict[str, Any] | None:
        """Generate the schema for the configured template.

        Args:
            settings: Component settings; only ``template`` is read.

        Returns:
            The schema dict, or None when ``template`` is missing, empty or
            not a string.
        """
        template = settings.get("template")
        if not isinstance(template, str) or not template:
            logger.debug("No template in settings, skipping schema generation")
            return None

        return build_schema(template).to_dict()


def get_template_schema_as_json(template: str) -> str:
    """Return the provider-generated schema for a template as JSON text.

    Unlike :func:`build_schema_json`, an empty template yields ``"{}"``
    because the provider treats it as absent.
    """
    provider = TemplateSchemaProvider()
    schema = provider.get_input_schema({"template": template})
    if schema is None:
        return EMPTY_SCHEMA_JSON

    try:
        return serialize_schema(schema)
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to serialize template schema: {e}")
        return EMPTY_SCHEMA_JSON
