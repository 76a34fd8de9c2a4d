"""Template API routes.

Exposes input schema generation, prompt rendering and extension metadata.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status

from promptschema.api.schemas import (
    RenderRequest,
    RenderResult,
    SchemaRequest,
    SchemaResponse,
)
from promptschema.core.factory import get_factory
from promptschema.interfaces.renderer import TemplateRenderError
from promptschema.strategies.template_engine import (
    extract_for_loop_arrays,
    extract_variables,
    get_extension_metadata,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post(
    "/schema",
    response_model=SchemaResponse,
    status_code=status.HTTP_200_OK,
)
async def generate_schema(request: SchemaRequest) -> SchemaResponse:
    """Generate the input schema for a template.

    A missing or empty template is not an error: the response carries a
    null schema so hosts can render the form without dynamic fields.

    Args:
        request: Request containing the template source.

    Returns:
        SchemaResponse with the schema and the extracted names.
    """
    provider = get_factory().get_schema_provider()
    input_schema = provider.get_input_schema(request.model_dump())

    template = request.template or ""
    response = SchemaResponse(
        input_schema=input_schema,
        variables=extract_variables(template),
        loop_arrays=extract_for_loop_arrays(template),
    )

    logger.info(
        f"Schema generated: {len(response.variables)} variables, "
        f"{len(response.loop_arrays)} loop arrays"
    )
    return response


@router.post(
    "/render",
    response_model=RenderResult,
    status_code=status.HTTP_200_OK,
)
async def render_template(request: RenderRequest) -> RenderResult:
    """Render a template with the supplied variables.

    Args:
        request: Request containing the template and its variables.

    Returns:
        RenderResult with the trimmed prompt and missing variables.

    Raises:
        HTTPException: If the template is empty or fails to render.
    """
    try:
        prompt = get_factory().get_prompt_template(request.template)
        return prompt.render(request.template_variables)

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except TemplateRenderError as e:
        logger.warning(f"Template {e.stage} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.get("/metadata")
async def extension_metadata() -> dict[str, Any]:
    """Return metadata describing the prompt template extension."""
    return get_extension_metadata().model_dump(by_alias=True, exclude_none=True)
