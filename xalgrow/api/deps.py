# FILE: xalgrow/api/deps.py

from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xalgrow.models.file import File
from xalgrow.models.project import Project


async def get_project_or_404(db: AsyncSession, pid: Optional[int]) -> Project:
    p = None
    if pid is not None:
        p = (await db.execute(select(Project).where(Project.id == pid))).scalar_one_or_none()
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p


async def get_file_or_404(db: AsyncSession, fid: int) -> File:
    f = (await db.execute(select(File).where(File.id == fid))).scalar_one_or_none()
    if not f:
        raise HTTPException(status_code=404, detail="File not found")
    return f
