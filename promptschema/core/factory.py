"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from promptschema.core.config import Settings, get_settings
from promptschema.interfaces.renderer import BaseTemplateRenderer
from promptschema.interfaces.schema_provider import BaseSchemaProvider
from promptschema.strategies.template_engine import (
    DjangoTemplateRenderer,
    PromptTemplate,
    TemplateSchemaProvider,
)

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        provider = factory.get_schema_provider()
        prompt = factory.get_prompt_template("Hello {{ name }}")
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._schema_provider_cache: BaseSchemaProvider | None = None
        self._renderer_cache: BaseTemplateRenderer | None = None

    def get_schema_provider(self) -> BaseSchemaProvider:
        """Get a schema provider instance.

        Returns:
            A BaseSchemaProvider implementation instance.
        """
        if self._schema_provider_cache is None:
            logger.info("Instantiating template schema provider")
            self._schema_provider_cache = TemplateSchemaProvider()

        return self._schema_provider_cache

    def get_renderer(self) -> BaseTemplateRenderer:
        """Get a template renderer instance.

        Returns:
            A BaseTemplateRenderer implementation instance.
        """
        if self._renderer_cache is None:
            logger.info(
                f"Instantiating template renderer: autoescape={self._settings.render_autoescape}"
            )
            self._renderer_cache = DjangoTemplateRenderer(
                autoescape=self._settings.render_autoescape,
            )

        return self._renderer_cache

    def get_prompt_template(self, template: str) -> PromptTemplate:
        """Create a prompt template sharing the cached renderer.

        Args:
            template: The template source.

        Returns:
            A new PromptTemplate instance.
        """
        return PromptTemplate(
            template,
            renderer=self.get_renderer(),
            settings=self._settings,
        )

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._schema_provider_cache = None
        self._renderer_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
