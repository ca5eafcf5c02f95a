# =========================================================
# FILE: xalgrow/api/ai.py
# =========================================================
# Proxy endpoints in front of the OpenAI / Anthropic APIs.

import logging
from typing import List, Tuple

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from xalgrow.api.deps import get_project_or_404
from xalgrow.core.database import get_db
from xalgrow.models.file import File
from xalgrow.schemas.generate import (
    CodeGenerationResult,
    GenerateAppRequest,
    GenerateAppResponse,
    GenerateCodeRequest,
    GeneratedFileResponse,
    GenerationModel,
)
from xalgrow.services import ai_service
from xalgrow.services.ai_safeguards import normalize_ai_exception

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = logging.getLogger("xalgrow.ai")

APP_GENERATED_MESSAGE = "Application generated successfully"


def _parse_model(value: str) -> GenerationModel:
    try:
        return GenerationModel(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid model specified")


def _ai_failure(err: Exception, what: str) -> HTTPException:
    norm = normalize_ai_exception(err)
    logger.error("%s failed [%s]: %s", what, norm.code, norm.raw)
    return HTTPException(status_code=norm.status_code, detail=norm.message)


@router.post("/generate", response_model=CodeGenerationResult)
async def generate_code(body: GenerateCodeRequest):
    if not (body.prompt or "").strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    model = _parse_model(body.model)

    try:
        code = await ai_service.generate_code(body.prompt, model)
    except Exception as e:
        raise _ai_failure(e, "Code generation")

    return CodeGenerationResult(code=code)


@router.post("/generate-app", response_model=GenerateAppResponse)
async def generate_app(body: GenerateAppRequest, db: AsyncSession = Depends(get_db)):
    description = (body.description or "").strip()
    if not description:
        raise HTTPException(status_code=400, detail="Description is required")
    if body.project_id is None:
        raise HTTPException(status_code=400, detail="Project ID is required")

    model = _parse_model(body.model)
    project = await get_project_or_404(db, body.project_id)

    logger.info("Generating app for project %s with %s: %s", project.id, model.value, description[:100])

    # Step 1: file structure
    try:
        planned = await ai_service.plan_file_structure(description, model)
    except ai_service.AIResponseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise _ai_failure(e, "File structure generation")

    # Step 2: one completion per file, stored together once all succeeded
    created: List[Tuple[File, str]] = []
    for entry in planned:
        try:
            content = await ai_service.generate_file_content(description, entry, model)
        except Exception as e:
            raise _ai_failure(e, f"Content generation for {entry.path}/{entry.name}")

        row = File(
            name=entry.name,
            content=content,
            path=entry.path,
            project_id=project.id,
        )
        db.add(row)
        created.append((row, entry.description))
        logger.info("Created file: %s", row.full_path)

    await db.commit()

    # Step 3
    return GenerateAppResponse(
        message=APP_GENERATED_MESSAGE,
        files=[GeneratedFileResponse.from_row(row, description=desc) for row, desc in created],
    )
