from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xalgrow.core.database import get_db
from xalgrow.models.template import Template
from xalgrow.schemas.projects import TemplateResponse

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
async def templates(db: AsyncSession = Depends(get_db)):
    rows = (await db.execute(select(Template).order_by(Template.id.asc()))).scalars().all()
    return [TemplateResponse.from_row(t) for t in rows]


# declared before /{tid} so "premium" is not read as an id
@router.get("/premium", response_model=List[TemplateResponse])
async def premium_templates(db: AsyncSession = Depends(get_db)):
    rows = (
        await db.execute(
            select(Template)
            .where(Template.is_premium.is_(True))
            .order_by(Template.id.asc())
        )
    ).scalars().all()
    return [TemplateResponse.from_row(t) for t in rows]


@router.get("/{tid}", response_model=TemplateResponse)
async def template(tid: int, db: AsyncSession = Depends(get_db)):
    t = (await db.execute(select(Template).where(Template.id == tid))).scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    return TemplateResponse.from_row(t)
