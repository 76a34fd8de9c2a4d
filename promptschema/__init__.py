"""Template variable discovery and input schema generation for prompt templates."""

__version__ = "1.0.0"
