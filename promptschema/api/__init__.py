"""FastAPI routers."""

from promptschema.api.templates import router as templates_router

__all__ = [
    "templates_router",
]
