# xalgrow/core/database.py
from typing import Any, Dict

from sqlalchemy import DateTime, Text
from sqlalchemy.dialects.mysql import DATETIME, LONGTEXT
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from xalgrow.core.config import get_database_url


def engine_options(url: str) -> Dict[str, Any]:
    # aiosqlite runs the connection in a worker thread
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # MySQL drops idle connections after wait_timeout
    return {"pool_pre_ping": True, "pool_recycle": 3600}


db_url = get_database_url()
engine = create_async_engine(db_url, **engine_options(db_url))
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

# MySQL gets the wide column types, everything else the generic ones.
LongText = Text().with_variant(LONGTEXT(), "mysql")
Timestamp = DateTime().with_variant(DATETIME(fsp=3), "mysql")


class Base(DeclarativeBase):
    pass


async def get_db():
    """FastAPI dependency: one session per request."""
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """Create missing tables. There are no migrations."""
    import xalgrow.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
