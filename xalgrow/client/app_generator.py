# FILE: xalgrow/client/app_generator.py

import logging
from typing import Optional

from pydantic import ValidationError

from xalgrow.client.errors import GenerationError, TransportError
from xalgrow.client.transport import ApiClient, error_message, get_api_client, read_json
from xalgrow.schemas.generate import (
    ApplicationGenerationResult,
    DEFAULT_GENERATION_MODEL,
    GenerationModel,
    GenerationRequest,
)

logger = logging.getLogger("xalgrow.client.app_generator")

GENERATE_APP_PATH = "/api/ai/generate-app"
FALLBACK_MESSAGE = "Failed to generate application"


async def generate_application(
        description: str,
        project_id: int,
        model: GenerationModel = DEFAULT_GENERATION_MODEL,
        client: Optional[ApiClient] = None,
) -> ApplicationGenerationResult:
    """
    Generate a complete application for ``description`` and attach the
    generated files to the existing project ``project_id``.

    Raises GenerationError with the backend's message on a non-2xx response,
    TransportError when the backend cannot be reached or answers garbage.
    """
    req = GenerationRequest(description=description, project_id=project_id, model=model)
    logger.info("Generating application for project %s with %s: %s", project_id, req.model.value, description[:100])

    api = client or get_api_client()
    res = await api.request("POST", GENERATE_APP_PATH, req.to_payload())

    if not res.is_success:
        message = error_message(res, FALLBACK_MESSAGE)
        logger.warning("application generation failed (%s): %s", res.status_code, message)
        raise GenerationError(message, status_code=res.status_code)

    data = read_json(res)
    try:
        result = ApplicationGenerationResult.model_validate(data)
    except ValidationError as e:
        raise TransportError(f"{FALLBACK_MESSAGE}: unexpected response shape", status_code=res.status_code) from e

    logger.info("Generated %d file(s) for project %s", len(result.files), project_id)
    return result
