# =========================================================
# FILE: xalgrow/schemas/generate.py
# =========================================================

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from xalgrow.core.paths import join_file_path
from xalgrow.schemas.projects import FileResponse


class GenerationModel(str, Enum):
    """AI provider a generation request is routed to."""
    OPENAI = "openai"         # primary
    ANTHROPIC = "anthropic"   # secondary


DEFAULT_GENERATION_MODEL = GenerationModel.OPENAI


# ---------- client side ----------

class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str
    project_id: int = Field(..., alias="projectId")
    model: GenerationModel = DEFAULT_GENERATION_MODEL

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CodeGenerationResult(BaseModel):
    code: str


class FileArtifact(BaseModel):
    """A generated file as returned by the backend.

    Only ``name``, ``path`` and ``content`` are required; whatever else the
    backend sends along (``id``, ``description``, timestamps) is kept so the
    artifact can be stored back into the ``files`` table unchanged.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    path: str
    content: str
    project_id: Optional[int] = Field(None, alias="projectId")

    @property
    def full_path(self) -> str:
        return join_file_path(self.path, self.name)


class ApplicationGenerationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    files: List[FileArtifact]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


# ---------- server side ----------

class GenerateCodeRequest(BaseModel):
    prompt: Optional[str] = None
    model: str = DEFAULT_GENERATION_MODEL.value


class GenerateAppRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    project_id: Optional[int] = Field(None, alias="projectId")
    model: str = DEFAULT_GENERATION_MODEL.value


class PlannedFile(BaseModel):
    """One entry of the file structure the model proposes before writing code."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    path: Optional[str] = ""
    description: Optional[str] = ""

    @field_validator("path", "description", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        # models send null for root-level files
        return "" if v is None else v


class GeneratedFileResponse(FileResponse):
    description: str = ""


class GenerateAppResponse(BaseModel):
    message: str
    files: List[GeneratedFileResponse] = Field(default_factory=list)
