# FILE: xalgrow/services/ai_service.py

import asyncio
import json
import logging
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from xalgrow.core import config
from xalgrow.schemas.generate import GenerationModel, PlannedFile
from xalgrow.services.prompt_service import (
    CODE_ASSISTANT_SYSTEM_PROMPT,
    FILE_STRUCTURE_SYSTEM_PROMPT,
    build_file_system_prompt,
    build_file_user_prompt,
    build_structure_user_prompt,
)

logger = logging.getLogger("xalgrow.ai")

NO_CONTENT_MESSAGE = "No content returned from AI"

# Lazy initialization - only create clients when needed
_openai_client = None
_anthropic_client = None


def get_openai():
    global _openai_client
    if _openai_client is None:
        _openai_client = config.get_openai_client()
    return _openai_client


def get_anthropic():
    global _anthropic_client
    if _anthropic_client is None:
        _anthropic_client = config.get_anthropic_client()
    return _anthropic_client


# =========================
# ERRORS
# =========================
class AIResponseError(Exception):
    """The provider answered, but not with something we can use."""


class InvalidAIJson(AIResponseError):
    pass


class InvalidFileStructure(AIResponseError):
    pass


# =========================
# JSON EXTRACTION
# =========================
def _extract_json(text: str) -> Dict[str, Any]:
    if not text:
        raise InvalidAIJson("Empty AI response")

    t = text.strip()

    # 1) direct JSON
    try:
        return json.loads(t)
    except json.JSONDecodeError:
        pass

    # 2) ```json fenced
    fence = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", t, re.S)
    if fence:
        try:
            return json.loads(fence.group(1))
        except json.JSONDecodeError:
            pass

    # 3) first {...} block
    brace = re.search(r"(\{.*\})", t, re.S)
    if brace:
        try:
            return json.loads(brace.group(1))
        except json.JSONDecodeError:
            pass

    raise InvalidAIJson("Could not extract valid JSON")


def strip_code_fences(text: str) -> str:
    t = (text or "").strip()
    if t.startswith("```"):
        lines = t.splitlines()
        if len(lines) >= 2 and lines[-1].strip() == "```":
            t = "\n".join(lines[1:-1])
    return t


def _anthropic_text(resp) -> str:
    blocks = getattr(resp, "content", None) or []
    if not blocks:
        return NO_CONTENT_MESSAGE
    text = getattr(blocks[0], "text", None)
    if text:
        return text
    # non-text first block (tool use etc.): hand back its raw form
    return json.dumps([b.model_dump() if hasattr(b, "model_dump") else str(b) for b in blocks])


# =========================
# PROVIDER DISPATCH
# =========================
async def complete(model: GenerationModel, system: str, user: str, json_mode: bool = False) -> str:
    if model == GenerationModel.OPENAI:
        extra: Dict[str, Any] = {}
        if json_mode:
            extra["response_format"] = {"type": "json_object"}

        def _call():
            return get_openai().chat.completions.create(
                model=config.OPENAI_MODEL,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **extra,
            )

        resp = await asyncio.to_thread(_call)
        return resp.choices[0].message.content or ""

    if model == GenerationModel.ANTHROPIC:
        def _call():
            return get_anthropic().messages.create(
                model=config.ANTHROPIC_MODEL,
                max_tokens=config.ANTHROPIC_MAX_TOKENS,
                system=system,
                messages=[{"role": "user", "content": user}],
            )

        resp = await asyncio.to_thread(_call)
        return _anthropic_text(resp)

    raise ValueError(f"Unsupported model: {model}")


# =========================
# CODE SNIPPETS
# =========================
async def generate_code(prompt: str, model: GenerationModel) -> str:
    return await complete(model, CODE_ASSISTANT_SYSTEM_PROMPT, prompt)


# =========================
# APPLICATIONS
# =========================
async def plan_file_structure(description: str, model: GenerationModel) -> List[PlannedFile]:
    raw = await complete(
        model,
        FILE_STRUCTURE_SYSTEM_PROMPT,
        build_structure_user_prompt(description),
        json_mode=True,
    )

    try:
        data = _extract_json(raw)
    except InvalidAIJson:
        logger.error("Unparsable file structure from %s: %s", model.value, (raw or "")[:500])
        raise InvalidAIJson("Failed to parse AI response")

    files = data.get("files") if isinstance(data, dict) else None
    if not isinstance(files, list):
        raise InvalidFileStructure("Invalid file structure generated")

    try:
        return [PlannedFile.model_validate(f) for f in files]
    except ValidationError as e:
        logger.error("Invalid file entry in structure: %s", e)
        raise InvalidFileStructure("Invalid file structure generated") from e


async def generate_file_content(description: str, planned: PlannedFile, model: GenerationModel) -> str:
    raw = await complete(
        model,
        build_file_system_prompt(description),
        build_file_user_prompt(planned),
    )
    return strip_code_fences(raw)
