"""
test_projects.py - projects / files CRUD and ZIP export
"""

import io
import zipfile
from urllib.parse import quote

import pytest

from xalgrow.core.config import DEV_USER_ID


class TestProjects:

    @pytest.mark.asyncio
    async def test_create_without_user_uses_dev_account(self, api):
        res = await api.post(
            "/api/projects",
            json={"name": "Shop", "description": "store", "framework": "react", "backend": "express"},
        )

        assert res.status_code == 201
        body = res.json()
        assert body["name"] == "Shop"
        assert body["userId"] == DEV_USER_ID
        assert body["createdAt"] and body["updatedAt"]

        listed = (await api.get("/api/projects")).json()
        assert [p["id"] for p in listed] == [body["id"]]

    @pytest.mark.asyncio
    async def test_list_by_user(self, api, project_id):
        owner = (await api.get(f"/api/projects/{project_id}")).json()["userId"]

        res = await api.get("/api/projects", params={"userId": owner})

        assert res.status_code == 200
        assert [p["name"] for p in res.json()] == ["Todo"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, api):
        res = await api.get("/api/projects", params={"userId": 999})

        assert res.status_code == 404
        assert res.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_missing_fields_are_rejected_with_message(self, api):
        res = await api.post("/api/projects", json={"name": "Shop"})

        assert res.status_code == 400
        assert "framework" in res.json()["message"]

    @pytest.mark.asyncio
    async def test_update(self, api, project_id):
        res = await api.put(f"/api/projects/{project_id}", json={"name": "Todo v2", "description": None})

        assert res.status_code == 200
        assert res.json()["name"] == "Todo v2"
        assert res.json()["framework"] == "react"

    @pytest.mark.asyncio
    async def test_update_rejects_empty_name(self, api, project_id):
        res = await api.put(f"/api/projects/{project_id}", json={"name": "  "})

        assert res.status_code == 400

    @pytest.mark.asyncio
    async def test_get_unknown(self, api):
        res = await api.get("/api/projects/999")

        assert res.status_code == 404
        assert res.json() == {"message": "Project not found"}

    @pytest.mark.asyncio
    async def test_delete_removes_files(self, api, project_id):
        await api.post(f"/api/projects/{project_id}/files", json={"name": "a.js", "content": "1"})

        res = await api.delete(f"/api/projects/{project_id}")

        assert res.status_code == 200
        assert (await api.get(f"/api/projects/{project_id}")).status_code == 404
        assert (await api.get(f"/api/projects/{project_id}/files")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown(self, api):
        res = await api.delete("/api/projects/999")

        assert res.status_code == 404


class TestFiles:

    @pytest.mark.asyncio
    async def test_create_list_update_delete(self, api, project_id):
        created = await api.post(
            f"/api/projects/{project_id}/files",
            json={"name": "App.jsx", "path": "src", "content": "export default 1"},
        )
        assert created.status_code == 201
        fid = created.json()["id"]
        assert created.json()["projectId"] == project_id

        listed = (await api.get(f"/api/projects/{project_id}/files")).json()
        assert [(f["path"], f["name"]) for f in listed] == [("src", "App.jsx")]

        updated = await api.put(f"/api/files/{fid}", json={"content": "export default 2"})
        assert updated.status_code == 200
        assert updated.json()["content"] == "export default 2"
        assert updated.json()["name"] == "App.jsx"

        assert (await api.delete(f"/api/files/{fid}")).status_code == 200
        assert (await api.get(f"/api/projects/{project_id}/files")).json() == []

    @pytest.mark.asyncio
    async def test_file_in_unknown_project(self, api):
        res = await api.post("/api/projects/999/files", json={"name": "a.js"})

        assert res.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_file(self, api):
        assert (await api.put("/api/files/999", json={"content": "x"})).status_code == 404
        res = await api.delete("/api/files/999")
        assert res.status_code == 404
        assert res.json() == {"message": "File not found"}


class TestExport:

    @pytest.mark.asyncio
    async def test_zip_contains_files_at_their_paths(self, api, project_id):
        await api.post(f"/api/projects/{project_id}/files", json={"name": "index.html", "content": "<html/>"})
        await api.post(
            f"/api/projects/{project_id}/files",
            json={"name": "App.jsx", "path": "/src/", "content": "export default App"},
        )

        res = await api.get(f"/api/projects/{project_id}/export")

        assert res.status_code == 200
        assert res.headers["content-type"] == "application/zip"
        assert "Todo.zip" in res.headers["content-disposition"]

        with zipfile.ZipFile(io.BytesIO(res.content)) as z:
            assert z.namelist() == ["index.html", "src/App.jsx"]
            assert z.read("src/App.jsx") == b"export default App"

    @pytest.mark.asyncio
    async def test_non_ascii_project_name(self, api):
        created = await api.post(
            "/api/projects",
            json={"name": "待办 应用", "framework": "react", "backend": "express"},
        )
        pid = created.json()["id"]

        res = await api.get(f"/api/projects/{pid}/export")

        assert res.status_code == 200
        disposition = res.headers["content-disposition"]
        assert 'filename="download.zip"' in disposition
        assert "filename*=UTF-8''" + quote("待办_应用.zip", safe="") in disposition

    @pytest.mark.asyncio
    async def test_quotes_in_project_name(self, api):
        created = await api.post(
            "/api/projects",
            json={"name": 'My "app"; v2', "framework": "react", "backend": "express"},
        )

        res = await api.get(f"/api/projects/{created.json()['id']}/export")

        assert res.status_code == 200
        assert 'filename="My_app_v2.zip"' in res.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_entries_outside_archive_root_are_skipped(self, api, project_id):
        await api.post(f"/api/projects/{project_id}/files", json={"name": "x", "path": "../../etc", "content": "no"})
        await api.post(f"/api/projects/{project_id}/files", json={"name": "ok.js", "path": "./src", "content": "yes"})

        res = await api.get(f"/api/projects/{project_id}/export")

        assert res.status_code == 200
        with zipfile.ZipFile(io.BytesIO(res.content)) as z:
            assert z.namelist() == ["src/ok.js"]

    @pytest.mark.asyncio
    async def test_export_unknown(self, api):
        assert (await api.get("/api/projects/999/export")).status_code == 404
