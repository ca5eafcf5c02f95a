"""
Pytest fixtures.

- the FastAPI app runs against a fresh in-memory SQLite database per test
- HTTP goes through httpx transports, nothing leaves the process
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import xalgrow.models  # noqa: F401  (registers all tables on Base.metadata)
from xalgrow.client import ApiClient
from xalgrow.core.database import Base, get_db
from xalgrow.models.project import Project
from xalgrow.models.user import User
from xalgrow.server import app

# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def project_id(db: AsyncSession) -> int:
    """A user with one empty project."""
    user = User(username="tester", email="tester@example.com", password="x")
    db.add(user)
    await db.commit()

    project = Project(name="Todo", description="", user_id=user.id, framework="react", backend="express")
    db.add(project)
    await db.commit()
    return project.id


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def asgi_transport(session_factory) -> httpx.ASGITransport:
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    yield httpx.ASGITransport(app=app)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api(asgi_transport) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Raw HTTP client against the app."""
    async with httpx.AsyncClient(transport=asgi_transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def xalgrow_client(asgi_transport) -> AsyncGenerator[ApiClient, None]:
    """The package's own ApiClient, wired to the app in-process."""
    async with ApiClient("http://test", token="test-token", transport=asgi_transport) as client:
        yield client
