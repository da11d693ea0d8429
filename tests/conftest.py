"""Shared fixtures for catalog admin tests.

Every test gets its own SQLite database file under tmp_path, so tests
never see each other's rows. The in-memory URL set below only backs the
module-level engine, which the fixtures replace. The asset store is
replaced by an in-memory fake.
"""

import os

# Must be set before the application settings are first imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from catalog_admin.catalog.models import Product
from catalog_admin.catalog.service import CatalogService
from catalog_admin.domain.exceptions import UpstreamError
from catalog_admin.infrastructure.asset_store import UploadedAsset, get_asset_store
from catalog_admin.infrastructure.database import Base, get_session
from catalog_admin.main import app


class FakeAssetStore:
    """In-memory stand-in for the ImageKit client."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, bytes]] = []
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, content: bytes, file_name: str) -> UploadedAsset:
        if self.fail_upload:
            raise UpstreamError("imagekit", "Upload failed: unavailable", 503)
        self.uploads.append((file_name, content))
        file_id = f"file-{len(self.uploads)}"
        return UploadedAsset(url=f"https://ik.example.com/{file_id}.jpg", file_id=file_id)

    async def delete(self, file_id: str) -> None:
        if self.fail_delete:
            raise UpstreamError("imagekit", "Delete failed: unavailable", 503)
        self.deleted.append(file_id)

    async def close(self) -> None:
        pass


def product_data(**overrides: Any) -> dict[str, Any]:
    """Valid product fields keyed by model attribute name."""
    data = {
        "name": "Hydrating Serum",
        "category": "Skincare",
        "price": 24.5,
        "description": "Lightweight serum with hyaluronic acid",
        "image_url": "https://cdn.example.com/serum.jpg",
    }
    data.update(overrides)
    return data


async def _create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def database_url(tmp_path) -> str:
    """Per-test SQLite database file."""
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
def asset_store() -> FakeAssetStore:
    """Create an in-memory asset store."""
    return FakeAssetStore()


@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine with the catalog tables in place."""
    engine = create_async_engine(database_url, poolclass=NullPool)
    await _create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def service(session: AsyncSession, asset_store: FakeAssetStore) -> CatalogService:
    """Create catalog service with the fake asset store."""
    return CatalogService(session, asset_store)


@pytest.fixture
def make_product(
    service: CatalogService,
) -> Callable[..., Awaitable[Product]]:
    """Factory creating products one second apart, oldest first."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    created = 0

    async def _make(**overrides: Any) -> Product:
        nonlocal created
        product = await service.products.create(product_data(**overrides))
        product.created_at = base + timedelta(seconds=created)
        created += 1
        await service.session.flush()
        return product

    return _make


@pytest.fixture
def client(
    database_url: str,
    asset_store: FakeAssetStore,
) -> Generator[TestClient, None, None]:
    """Create test client bound to the per-test database and fake asset store."""
    engine = create_async_engine(database_url, poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_asset_store] = lambda: asset_store

    with TestClient(app) as client:
        client.portal.call(_create_all, engine)
        yield client
        client.portal.call(engine.dispose)

    app.dependency_overrides.clear()
