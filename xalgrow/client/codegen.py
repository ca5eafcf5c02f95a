# FILE: xalgrow/client/codegen.py

import logging
from typing import Optional

from pydantic import ValidationError

from xalgrow.client.errors import GenerationError, TransportError
from xalgrow.client.transport import ApiClient, error_message, get_api_client, read_json
from xalgrow.schemas.generate import CodeGenerationResult, DEFAULT_GENERATION_MODEL

logger = logging.getLogger("xalgrow.client.codegen")

GENERATE_PATH = "/api/ai/generate"

ANALYSIS_PROMPT_TEMPLATE = """Analyze the following code and provide insights on improvements:

{code}"""


def build_analysis_prompt(source_code: str) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(code=source_code)


async def _request_code(prompt: str, fallback: str, client: Optional[ApiClient]) -> str:
    api = client or get_api_client()
    res = await api.request(
        "POST",
        GENERATE_PATH,
        {"prompt": prompt, "model": DEFAULT_GENERATION_MODEL.value},
    )

    if not res.is_success:
        message = error_message(res, fallback)
        logger.warning("code generation failed (%s): %s", res.status_code, message)
        raise GenerationError(message, status_code=res.status_code)

    data = read_json(res)
    try:
        return CodeGenerationResult.model_validate(data).code
    except ValidationError as e:
        raise TransportError(f"{fallback}: unexpected response shape", status_code=res.status_code) from e


async def generate_code(prompt: str, client: Optional[ApiClient] = None) -> str:
    """Generate a single code snippet for ``prompt`` with the primary model."""
    return await _request_code(prompt, "Failed to generate code", client)


async def analyze_code(source_code: str, client: Optional[ApiClient] = None) -> str:
    """Ask the primary model for improvement insights on ``source_code``."""
    return await _request_code(build_analysis_prompt(source_code), "Failed to analyze code", client)
