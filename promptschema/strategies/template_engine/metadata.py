"""Extension metadata for the prompt template component."""

from promptschema.strategies.template_engine.models import ExtensionMetadata
from promptschema.strategies.template_engine.schema import TemplateSchemaProvider


def get_extension_metadata() -> ExtensionMetadata:
    """Return metadata describing the prompt template extension.

    ``templateVariables`` is a dynamic input: the host regenerates its
    fields from the ``template`` setting through the schema provider.
    """
    return ExtensionMetadata(
        name="pongo2-prompt",
        type="flogo:activity",
        version="1.0.0",
        title="Pongo2 AI Prompt Template",
        description="Processes Pongo2/Django templates for AI prompts with dynamic variable mapping",
        schema_provider=TemplateSchemaProvider(),
        dynamic_inputs={
            "templateVariables": {
                "dependsOn": "template",
                "schemaGenerator": "template",
            },
        },
    )
