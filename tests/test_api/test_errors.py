"""
test_errors.py - every backend failure is rendered as {"message": ...}
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from xalgrow.server import app


@pytest.mark.asyncio
async def test_unhandled_error_is_json(asgi_transport):
    # the server error middleware re-raises after responding
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)

    with patch(
            "xalgrow.api.projects.get_project_or_404",
            new=AsyncMock(side_effect=RuntimeError("database is locked")),
    ):
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            res = await client.get("/api/projects/1")

    assert res.status_code == 500
    assert res.json() == {"message": "Internal server error"}


@pytest.mark.asyncio
async def test_http_error_is_json(api):
    res = await api.get("/api/nope")

    assert res.status_code == 404
    assert res.json() == {"message": "Not Found"}
