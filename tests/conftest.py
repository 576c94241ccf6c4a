import asyncio
import os

# Settings are read at import time; keep startup away from Postgres
os.environ["CREATE_TABLES"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from event_pages.api.events import get_asset_pipeline
from event_pages.core.database import get_db
from event_pages.main import app
from event_pages.models.event import Base
from event_pages.services.assets import AssetPipeline


class FakeBlobStore:
    """In-memory blob store; delay and error simulate a slow or broken bucket"""

    def __init__(self):
        self.objects = {}
        self.delay = 0.0
        self.error = None

    async def upload(self, key, data, content_type):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.objects[key] = (data, content_type)
        return f"https://assets.test/{key}"


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'events.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory, blob_store):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    pipeline = AssetPipeline(blob_store, upload_timeout=1.0, batch_timeout=2.0)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_asset_pipeline] = lambda: pipeline

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
