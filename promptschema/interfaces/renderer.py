"""Template rendering interfaces.

Defines the abstract base class for engines that render a template
string against a variable context.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal


class BaseTemplateRenderer(ABC):
    """Abstract base class for template rendering strategies."""

    @abstractmethod
    def render(self, template: str, context: dict[str, Any]) -> str:
        """Render a template string with the given context.

        Args:
            template: The template source text.
            context: Variable names mapped to their values.

        Returns:
            The rendered text, untrimmed.

        Raises:
            TemplateRenderError: If the template cannot be parsed or rendered.
        """


class TemplateRenderError(Exception):
    """Exception raised when a template fails to parse or render."""

    def __init__(self, message: str, stage: Literal["parse", "render"]) -> None:
        super().__init__(message)
        self.stage = stage
