# =========================================================
# FILE: xalgrow/api/projects.py
# =========================================================

import io
import zipfile
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from xalgrow.api.deps import get_file_or_404, get_project_or_404
from xalgrow.core.database import get_db
from xalgrow.core.paths import archive_path, attachment_header
from xalgrow.models.file import File
from xalgrow.models.project import Project
from xalgrow.models.user import User
from xalgrow.schemas.projects import (
    FileCreate,
    FileResponse,
    FileUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from xalgrow.services.seed_service import get_or_create_dev_user

router = APIRouter(prefix="/api", tags=["projects"])
logger = logging.getLogger("xalgrow.projects")


async def _resolve_user_id(db: AsyncSession, user_id: Optional[int]) -> int:
    # No auth layer: requests without a user act as the demo account.
    if user_id is None:
        return (await get_or_create_dev_user(db)).id

    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.id


# ---------- projects ----------

@router.get("/projects", response_model=List[ProjectResponse])
async def projects(
        user_id: Optional[int] = Query(None, alias="userId"),
        db: AsyncSession = Depends(get_db),
):
    uid = await _resolve_user_id(db, user_id)
    rows = (
        await db.execute(
            select(Project)
            .where(Project.user_id == uid)
            .order_by(Project.created_at.desc(), Project.id.desc())
        )
    ).scalars().all()
    return [ProjectResponse.from_row(p) for p in rows]


@router.post("/projects", response_model=ProjectResponse, status_code=201)
async def create_project(data: ProjectCreate, db: AsyncSession = Depends(get_db)):
    uid = await _resolve_user_id(db, data.user_id)
    p = Project(
        name=data.name,
        description=data.description,
        user_id=uid,
        framework=data.framework,
        backend=data.backend,
    )
    db.add(p)
    await db.commit()
    logger.info("Created project %s for user %s", p.id, uid)
    return ProjectResponse.from_row(p)


@router.get("/projects/{pid}", response_model=ProjectResponse)
async def project(pid: int, db: AsyncSession = Depends(get_db)):
    return ProjectResponse.from_row(await get_project_or_404(db, pid))


@router.put("/projects/{pid}", response_model=ProjectResponse)
async def update_project(pid: int, data: ProjectUpdate, db: AsyncSession = Depends(get_db)):
    p = await get_project_or_404(db, pid)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(p, key, value)
    p.updated_at = datetime.utcnow()
    await db.commit()
    return ProjectResponse.from_row(p)


@router.delete("/projects/{pid}")
async def delete_project(pid: int, db: AsyncSession = Depends(get_db)):
    # files first: SQLite does not enforce ON DELETE CASCADE by default
    await db.execute(delete(File).where(File.project_id == pid))
    res = await db.execute(delete(Project).where(Project.id == pid))

    if res.rowcount == 0:
        await db.rollback()
        raise HTTPException(status_code=404, detail="Project not found")

    await db.commit()
    return {"ok": True}


# ---------- files ----------

@router.get("/projects/{pid}/files", response_model=List[FileResponse])
async def project_files(pid: int, db: AsyncSession = Depends(get_db)):
    await get_project_or_404(db, pid)
    rows = (
        await db.execute(
            select(File)
            .where(File.project_id == pid)
            .order_by(File.id.asc())
        )
    ).scalars().all()
    return [FileResponse.from_row(f) for f in rows]


@router.post("/projects/{pid}/files", response_model=FileResponse, status_code=201)
async def create_file(pid: int, data: FileCreate, db: AsyncSession = Depends(get_db)):
    p = await get_project_or_404(db, pid)
    f = File(name=data.name, content=data.content, path=data.path, project_id=p.id)
    db.add(f)
    await db.commit()
    return FileResponse.from_row(f)


@router.put("/files/{fid}", response_model=FileResponse)
async def update_file(fid: int, data: FileUpdate, db: AsyncSession = Depends(get_db)):
    f = await get_file_or_404(db, fid)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(f, key, value)
    f.updated_at = datetime.utcnow()
    await db.commit()
    return FileResponse.from_row(f)


@router.delete("/files/{fid}")
async def delete_file(fid: int, db: AsyncSession = Depends(get_db)):
    res = await db.execute(delete(File).where(File.id == fid))
    if res.rowcount == 0:
        raise HTTPException(status_code=404, detail="File not found")
    await db.commit()
    return {"ok": True}


# ---------- export ----------

@router.get("/projects/{pid}/export")
async def export_project(pid: int, db: AsyncSession = Depends(get_db)):
    p = await get_project_or_404(db, pid)
    files = (
        await db.execute(
            select(File)
            .where(File.project_id == p.id)
            .order_by(File.id.asc())
        )
    ).scalars().all()

    logger.info("Exporting project %s (%d files)", p.id, len(files))

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as z:
        for f in files:
            entry = archive_path(f.full_path)
            if entry is None:
                logger.warning("Skipping file %s with unsafe path %r", f.id, f.full_path)
                continue
            z.writestr(entry, f.content)

    buf.seek(0)
    filename = (p.name or "project").replace(" ", "_") + ".zip"
    return StreamingResponse(
        buf,
        media_type="application/zip",
        headers={"Content-Disposition": attachment_header(filename)},
    )
