"""Shared test fixtures."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

import book_catalog.models  # noqa: F401
from book_catalog.api.deps import get_app_settings, get_collection
from book_catalog.config import Settings
from book_catalog.database import Base
from book_catalog.main import app
from book_catalog.services.book_service import BookService
from book_catalog.store import InMemoryCollection, SqlDocumentCollection


@pytest.fixture
async def sql_session_factory(tmp_path):
    """Session factory bound to a throwaway SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def sql_collection(sql_session_factory):
    return SqlDocumentCollection(sql_session_factory, "books")


@pytest.fixture(params=["memory", "sql"])
async def collection(request, sql_session_factory):
    """Run a test once per collection backend."""
    if request.param == "memory":
        return InMemoryCollection()
    return SqlDocumentCollection(sql_session_factory, "books")


@pytest.fixture
def service():
    return BookService(InMemoryCollection(), timeout=1.0)


@pytest.fixture
def settings():
    return Settings(seed_sample_data=False, enable_delete=False)


@pytest.fixture
async def client(sql_collection, settings):
    """Test client backed by the SQLite collection."""
    app.dependency_overrides[get_collection] = lambda: sql_collection
    app.dependency_overrides[get_app_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def dune_form():
    return {
        "name": "Dune",
        "author": "Frank Herbert",
        "isbn": "001",
        "pages": "412",
        "year": "1965",
    }
