import os

# Must be set before pixora.config is imported
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from typing import AsyncGenerator, Dict, List, Tuple
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from pixora.main import app
from pixora.db.session import get_db
from pixora.models import Base

# Test database URL - in-memory SQLite
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "Password123!"

@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for service-level tests"""
    async with session_factory() as session:
        yield session

@pytest.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the app with the test database"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture
def query_log(test_engine) -> List[str]:
    """SQL statements sent to the test database, in order"""
    statements: List[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", record)
    yield statements
    event.remove(test_engine.sync_engine, "before_cursor_execute", record)

async def register(client: AsyncClient, username: str, password: str = TEST_PASSWORD) -> Tuple[Dict[str, str], dict]:
    """Register a user and return (auth headers, user json)"""
    response = await client.post(
        "/api/auth/register",
        json={"username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]

async def create_post(client: AsyncClient, headers: Dict[str, str], caption: str = "hello",
                      image_url: str = "https://img.example.com/1.jpg") -> dict:
    response = await client.post(
        "/api/posts",
        json={"imageUrl": image_url, "caption": caption},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
