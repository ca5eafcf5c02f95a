from xalgrow.client.errors import GenerationError, TransportError
from xalgrow.client.transport import ApiClient, get_api_client, close_api_client
from xalgrow.client.codegen import generate_code, analyze_code
from xalgrow.client.app_generator import generate_application
from xalgrow.schemas.generate import (
    ApplicationGenerationResult,
    FileArtifact,
    GenerationModel,
)

__all__ = [
    "ApiClient", "get_api_client", "close_api_client",
    "GenerationError", "TransportError",
    "generate_code", "analyze_code", "generate_application",
    "ApplicationGenerationResult", "FileArtifact", "GenerationModel",
]
