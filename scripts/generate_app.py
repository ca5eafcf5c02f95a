#!/usr/bin/env python3
import argparse
import asyncio
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from xalgrow.client import ApiClient, GenerationError, GenerationModel, generate_application
from xalgrow.client.transport import error_message, read_json

BASE_URL = os.getenv("XALGROW_API_URL", "http://localhost:5000")
LOG_PATH = os.getenv("XALGROW_LOG_PATH", os.path.join("logs", "generate_runs.jsonl"))

DEFAULT_DESCRIPTION = (
    "A todo list app with add, delete and mark complete functionality, "
    "persisted in localStorage."
)


def now_iso() -> str:
    return datetime.utcnow().isoformat()


def append_log(entry: Dict[str, Any]) -> None:
    path = Path(LOG_PATH)
    if not path.is_absolute():
        path = Path.cwd() / path
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False) + "\n")


async def create_project(api: ApiClient, name: str, framework: str, backend: str) -> int:
    res = await api.request("POST", "/api/projects", {
        "name": name,
        "description": "Created by scripts/generate_app.py",
        "framework": framework,
        "backend": backend,
    })
    if not res.is_success:
        raise SystemExit(f"Project creation failed: HTTP {res.status_code} {error_message(res, res.text[:500])}")
    return int(read_json(res)["id"])


def write_files(files, out_dir: Path) -> None:
    for f in files:
        target = out_dir / f.full_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f.content, encoding="utf-8")
        print(f"  wrote {target}")


async def run_flow(
        description: str,
        model: GenerationModel,
        project_id: Optional[int],
        out_dir: Optional[Path],
) -> int:
    async with ApiClient(BASE_URL) as api:
        if project_id is None:
            project_id = await create_project(api, "Generated App", "react", "express")
            print(f"Created project {project_id}")

        started = now_iso()
        try:
            result = await generate_application(description, project_id, model, client=api)
        except GenerationError as e:
            append_log({"ts": started, "project_id": project_id, "model": model.value, "error": e.message, "status": e.status_code})
            print(f"Generation failed: {e.message}")
            return 1

    append_log({
        "ts": started,
        "finished": now_iso(),
        "project_id": project_id,
        "model": model.value,
        "message": result.message,
        "files": [f.full_path for f in result.files],
    })

    print(result.message)
    for f in result.files:
        print(f"  {f.full_path} ({len(f.content)} chars)")

    if out_dir:
        write_files(result.files, out_dir)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate an application through a running Xalgrow backend."
    )
    parser.add_argument("--description", default=DEFAULT_DESCRIPTION)
    parser.add_argument("--model", choices=[m.value for m in GenerationModel], default=GenerationModel.OPENAI.value)
    parser.add_argument("--project-id", type=int, default=None, help="existing project; a new one is created if omitted")
    parser.add_argument("--out", type=Path, default=None, help="also write the generated files below this directory")
    args = parser.parse_args()

    return asyncio.run(run_flow(args.description, GenerationModel(args.model), args.project_id, args.out))


if __name__ == "__main__":
    raise SystemExit(main())
