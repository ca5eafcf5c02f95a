# FILE: xalgrow/services/seed_service.py
#
# Data the app expects on first start: the template gallery and the demo
# account unauthenticated projects are attached to.

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from xalgrow.core.config import DEV_USER_ID
from xalgrow.models.template import Template
from xalgrow.models.user import User

logger = logging.getLogger("xalgrow.seed")

DEFAULT_TEMPLATES = [
    {
        "name": "E-commerce Dashboard",
        "description": "Complete store management solution",
        "image_url": "https://images.unsplash.com/photo-1517694712202-14dd9538aa97",
        "price": 999,
        "files": [],
        "is_premium": True,
    },
    {
        "name": "Blog Platform",
        "description": "Modern content publishing system",
        "image_url": "https://images.unsplash.com/photo-1499951360447-b19be8fe80f5",
        "price": 799,
        "files": [],
        "is_premium": True,
    },
    {
        "name": "SaaS Dashboard",
        "description": "User and analytics management",
        "image_url": "https://images.unsplash.com/photo-1611162617213-7d7a39e9b1d7",
        "price": 1499,
        "files": [],
        "is_premium": True,
    },
]


async def seed_templates(db: AsyncSession) -> int:
    n = (await db.execute(select(func.count(Template.id)))).scalar_one()
    if n:
        return 0

    for data in DEFAULT_TEMPLATES:
        db.add(Template(**data))
    await db.commit()
    logger.info("Seeded %d templates", len(DEFAULT_TEMPLATES))
    return len(DEFAULT_TEMPLATES)


async def get_or_create_dev_user(db: AsyncSession) -> User:
    user = (await db.execute(select(User).where(User.id == DEV_USER_ID))).scalar_one_or_none()
    if user:
        return user

    user = User(
        id=DEV_USER_ID,
        username="demo",
        email="demo@xalgrow.local",
        password="!",  # not a valid hash: the demo account cannot log in
        display_name="Demo User",
    )
    db.add(user)
    await db.commit()
    logger.info("Created dev user %s", DEV_USER_ID)
    return user
