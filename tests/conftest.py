"""Test configuration and fixtures"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from tablebook.main import app
from tablebook.database import Base, get_db
from tablebook.models.table import Table


@pytest.fixture
async def test_engine(tmp_path):
    """
    Create a file-backed SQLite database.

    A file rather than :memory: so that every session gets its own connection
    and concurrent requests contend for locks the way they would in production.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        connect_args={"timeout": 30},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    """Session for arranging data and inspecting results"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_tables(test_db):
    """Create the default dining tables"""
    tables = [
        Table(name="Table 1", capacity=2),
        Table(name="Table 2", capacity=2),
        Table(name="Table 3", capacity=4),
        Table(name="Table 4", capacity=4),
        Table(name="Table 5", capacity=6),
    ]

    for table in tables:
        test_db.add(table)

    await test_db.commit()
    return tables


@pytest.fixture
async def inactive_table(test_db):
    table = Table(name="Terrace", capacity=8, is_active=False)
    test_db.add(table)
    await test_db.commit()
    return table


@pytest.fixture
async def client(session_factory):
    """Create test client; each request gets its own session"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
