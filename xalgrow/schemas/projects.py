from datetime import datetime, timezone
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _iso(value: datetime) -> str:
    return value.replace(tzinfo=timezone.utc).isoformat()


class ProjectCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    user_id: Optional[int] = Field(None, alias="userId")
    framework: str
    backend: str

class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    framework: Optional[str] = None
    backend: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]):
        if v is not None and not v.strip():
            raise ValueError("Project name cannot be empty")
        return v

class ProjectResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: int
    name: str
    description: Optional[str] = None
    user_id: int = Field(..., alias="userId")
    framework: str
    backend: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_row(cls, p) -> "ProjectResponse":
        return cls(
            id=p.id,
            name=p.name,
            description=p.description,
            user_id=p.user_id,
            framework=p.framework,
            backend=p.backend,
            created_at=_iso(p.created_at),
            updated_at=_iso(p.updated_at),
        )


class FileCreate(BaseModel):
    name: str = Field(..., min_length=1)
    content: str = ""
    path: str = ""

class FileUpdate(BaseModel):
    name: Optional[str] = None
    content: Optional[str] = None
    path: Optional[str] = None

class FileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: int
    name: str
    content: str
    path: str
    project_id: int = Field(..., alias="projectId")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_row(cls, f, **extra: Any):
        return cls(
            id=f.id,
            name=f.name,
            content=f.content,
            path=f.path,
            project_id=f.project_id,
            created_at=_iso(f.created_at),
            updated_at=_iso(f.updated_at),
            **extra,
        )


class TemplateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    price: int
    files: List[Any] = Field(default_factory=list)
    is_premium: bool = Field(False, alias="isPremium")
    created_at: str = Field(..., alias="createdAt")

    @classmethod
    def from_row(cls, t) -> "TemplateResponse":
        return cls(
            id=t.id,
            name=t.name,
            description=t.description,
            image_url=t.image_url,
            price=t.price,
            files=t.files or [],
            is_premium=bool(t.is_premium),
            created_at=_iso(t.created_at),
        )
