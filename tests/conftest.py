import os
import pytest
import httpx
from httpx import ASGITransport
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

# app.core.config builds its settings on import
os.environ.setdefault("DB_NAME", "recipes_test_db")
os.environ.setdefault("DB_USER", "recipes")
os.environ.setdefault("DB_PASSWORD", "recipes")

from app.models import Base
from tests.test_config import test_settings


@pytest.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        test_settings.TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
        yield session


@pytest.fixture(scope="function")
async def async_client(db_engine):
    from app.main import app
    from app.db.session import get_db
    from app.core.config import get_settings

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with httpx.AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": test_settings.AUTH_TOKEN},
    ) as client:
        yield client

    app.dependency_overrides.clear()
