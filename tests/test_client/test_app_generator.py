"""
test_app_generator.py - generate_application

- request payload: description / projectId / model
- result mirrors the backend body, file order included
- backend message vs. fallback message on failure
"""

import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError

from xalgrow.client.app_generator import FALLBACK_MESSAGE, generate_application
from xalgrow.client.errors import GenerationError, TransportError
from xalgrow.client.transport import ApiClient
from xalgrow.schemas.generate import FileArtifact, GenerationModel, GenerationRequest

TODO_APP = {
    "message": "Application generated successfully",
    "files": [
        {
            "id": 11,
            "name": "index.html",
            "path": "",
            "content": "<!doctype html><div id=\"root\"></div>",
            "projectId": 7,
            "description": "Entry page",
        },
        {
            "id": 12,
            "name": "App.jsx",
            "path": "src",
            "content": "export default function App() { return null }",
            "projectId": 7,
            "description": "Root component",
        },
        {
            "id": 13,
            "name": "server.js",
            "path": "server",
            "content": "const express = require('express')",
            "projectId": 7,
            "description": "API server",
        },
    ],
}


def backend(status=200, body=None, text=None, calls=None) -> ApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append({"path": request.url.path, "body": json.loads(request.content)})
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)

    return ApiClient("http://backend", transport=httpx.MockTransport(handler))


# =============================================================================
# Success
# =============================================================================


class TestGenerateApplication:

    @pytest.mark.asyncio
    async def test_result_mirrors_backend_body(self):
        api = backend(body=TODO_APP)

        result = await generate_application(
            "A todo list app with add, delete and mark complete functionality", 7, client=api
        )

        assert result.message == "Application generated successfully"
        assert result.to_dict() == TODO_APP

    @pytest.mark.asyncio
    async def test_file_order_preserved(self):
        api = backend(body=TODO_APP)

        result = await generate_application("todo", 7, client=api)

        assert [f.name for f in result.files] == ["index.html", "App.jsx", "server.js"]
        assert [f.full_path for f in result.files] == ["index.html", "src/App.jsx", "server/server.js"]

    @pytest.mark.asyncio
    async def test_default_model_is_primary(self):
        calls = []
        api = backend(body={"message": "ok", "files": []}, calls=calls)

        result = await generate_application("todo", 7, client=api)

        assert result.files == []
        assert calls == [{
            "path": "/api/ai/generate-app",
            "body": {"description": "todo", "projectId": 7, "model": "openai"},
        }]

    @pytest.mark.asyncio
    async def test_secondary_model_is_forwarded(self):
        calls = []
        api = backend(body={"message": "ok", "files": []}, calls=calls)

        await generate_application("todo", 7, GenerationModel.ANTHROPIC, client=api)

        assert calls[0]["body"]["model"] == "anthropic"

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self):
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            return httpx.Response(200, json={
                "message": "Application generated successfully",
                "files": [{
                    "name": "README.md",
                    "path": "",
                    "content": body["description"],
                    "projectId": body["projectId"],
                }],
            })

        async with ApiClient("http://backend", transport=httpx.MockTransport(handler)) as api:
            first, second = await asyncio.gather(
                generate_application("first app", 1, client=api),
                generate_application("second app", 2, GenerationModel.ANTHROPIC, client=api),
            )

        assert first.files[0].content == "first app"
        assert first.files[0].project_id == 1
        assert second.files[0].content == "second app"
        assert second.files[0].project_id == 2


# =============================================================================
# Failure
# =============================================================================


class TestGenerateApplicationErrors:

    @pytest.mark.asyncio
    async def test_backend_message(self):
        api = backend(status=404, body={"message": "Project not found"})

        with pytest.raises(GenerationError) as exc_info:
            await generate_application("todo", 999, client=api)

        assert exc_info.value.message == "Project not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_unparsable_error_body(self):
        api = backend(status=500, text="<html>Internal Server Error</html>")

        with pytest.raises(GenerationError) as exc_info:
            await generate_application("todo", 7, client=api)

        assert exc_info.value.message == FALLBACK_MESSAGE
        assert exc_info.value.message == "Failed to generate application"

    @pytest.mark.asyncio
    async def test_error_body_without_message(self):
        api = backend(status=500, body={"error": "x"})

        with pytest.raises(GenerationError) as exc_info:
            await generate_application("todo", 7, client=api)

        assert exc_info.value.message == FALLBACK_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"message": "ok"},
            {"message": "ok", "files": "index.html"},
            {"message": "ok", "files": [{"name": "a.js"}]},
            ["not", "an", "object"],
        ],
    )
    async def test_unexpected_success_shape(self, body):
        api = backend(body=body)

        with pytest.raises(TransportError):
            await generate_application("todo", 7, client=api)

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with ApiClient("http://backend", transport=httpx.MockTransport(handler)) as api:
            with pytest.raises(TransportError):
                await generate_application("todo", 7, client=api)


class TestRequestModels:

    def test_generation_request_is_frozen(self):
        req = GenerationRequest(description="todo", project_id=7)

        with pytest.raises(ValidationError):
            req.description = "changed"

    def test_generation_request_accepts_wire_names(self):
        req = GenerationRequest.model_validate({"description": "todo", "projectId": 7, "model": "anthropic"})

        assert req.project_id == 7
        assert req.model is GenerationModel.ANTHROPIC

    def test_file_artifact_full_path_when_path_already_has_name(self):
        f = FileArtifact(name="App.jsx", path="/src/App.jsx", content="")
        assert f.full_path == "src/App.jsx"
