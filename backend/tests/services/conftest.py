"""Service test fixtures: async DB + FastAPI test client + fake fic lookup.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - get_fic_meta_source overridden with FakeFicSource (no network)

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session
      in a test sees the same database
    - Session cookies sent as an explicit Cookie header: the cookie is Secure and
      domain-scoped, which httpx's jar would not replay to http://test
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from ficai_signals.config import get_settings
from ficai_signals.db.base import Base
from ficai_signals.infrastructure.database import get_db, DatabaseSessionManager
from ficai_signals.infrastructure.fichub_client import get_fic_meta_source
import ficai_signals.infrastructure.database as db_module
import ficai_signals.models  # noqa: F401
from ficai_signals.main import app
from tests.services.fake_fichub import FakeFicSource, session_token


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fic_source():
    return FakeFicSource()


@pytest.fixture
async def client(test_engine, test_session_factory, fic_source):
    """FastAPI test client with DB and fic lookup dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_fic_meta_source] = lambda: fic_source

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register(client):
    """Register an account over HTTP; returns its session token."""
    async def _register(email: str = "reader@example.com", password: str = "hunter2hunter2"):
        res = await client.post("/v1/accounts", json={
            "email": email,
            "password": password,
            "betaKey": get_settings().beta_key,
        })
        assert res.status_code == 201, res.text
        return session_token(res)
    return _register
