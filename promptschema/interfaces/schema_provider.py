"""Schema provider interface.

Defines the abstract base class for components that derive an input
JSON Schema from activity settings.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseSchemaProvider(ABC):
    """Abstract base class for dynamic input schema generation.

    Hosts call a provider with the configured settings to learn which
    inputs a component expects before it runs.
    """

    @abstractmethod
    def get_input_schema(self, settings: dict[str, Any]) -> dict[str, Any] | None:
        """Generate an input schema from settings.

        Args:
            settings: Component settings as supplied by the host.

        Returns:
            The schema as a plain dict, or None when the settings do not
            carry enough information to build one.
        """
