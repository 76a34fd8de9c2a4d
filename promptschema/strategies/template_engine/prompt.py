"""Prompt template strategy.

Holds a configured prompt template and renders it against a bag of
template variables, reporting which expected variables were not supplied.
"""

import logging
from typing import Any

from promptschema.core.config import Settings, get_settings
from promptschema.interfaces.renderer import BaseTemplateRenderer
from promptschema.strategies.template_engine.extractor import extract_variables
from promptschema.strategies.template_engine.models import RenderResult
from promptschema.strategies.template_engine.renderer import DjangoTemplateRenderer
from promptschema.strategies.template_engine.schema import build_schema_json

logger = logging.getLogger(__name__)


class PromptTemplate:
    """A prompt template rendered at runtime from caller-supplied variables.

    Example:
        ```python
        prompt = PromptTemplate("Hello {{ name }}!")
        result = prompt.render({"name": "Alice"})
        assert result.rendered_prompt == "Hello Alice!"
        ```
    """

    def __init__(
        self,
        template: str,
        renderer: BaseTemplateRenderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the prompt template.

        Args:
            template: The Django-style template source.
            renderer: Rendering strategy. If None, a DjangoTemplateRenderer
                configured from settings is used.
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._template = template
        self._renderer = renderer or DjangoTemplateRenderer(
            autoescape=self._settings.render_autoescape,
        )
        logger.info("Prompt template initialized - template will be processed at runtime")

    @property
    def template(self) -> str:
        """Return the template source."""
        return self._template

    def render(self, template_variables: dict[str, Any] | None = None) -> RenderResult:
        """Render the template with the supplied variables.

        Variables whose value is None are dropped before rendering.

        Args:
            template_variables: Variable names mapped to their values.

        Returns:
            RenderResult with the rendered prompt and any missing variables.

        Raises:
            ValueError: If the template is empty.
            TemplateRenderError: If the template fails to parse or render.
        """
        if not self._template:
            raise ValueError("template cannot be empty")

        expected_vars = extract_variables(self._template)
        if expected_vars:
            logger.info(f"Template variables detected: {expected_vars}")
            logger.debug(f"Generated JSON schema: {build_schema_json(self._template)}")

        context = {
            key: value
            for key, value in (template_variables or {}).items()
            if value is not None
        }

        if not context:
            logger.info("No variables provided to template")
        else:
            logger.debug(f"Template context prepared with {len(context)} variables")

        missing_vars = [var for var in expected_vars if var not in context]
        if missing_vars:
            logger.warning(f"Template expects variables that are not provided: {missing_vars}")

        rendered = self._renderer.render(self._template, context)
        output = rendered.strip() if self._settings.render_trim_output else rendered
        logger.debug(
            f"Template rendered: {len(rendered)} characters, {len(output)} after trimming"
        )

        if not output.strip():
            logger.warning(
                f"Rendered output is empty for template {self._template!r} "
                f"with variables {list(context)}"
            )
        else:
            logger.info(f"Rendered prompt with {len(output)} characters")

        return RenderResult(rendered_prompt=output, missing_variables=missing_vars)
