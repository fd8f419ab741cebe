from typing import Callable, Dict
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import guild_service.domain.entities  # noqa: F401  registers tables on SQLModel.metadata
from guild_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from guild_service.adapter.sqlite import use_explicit_sqlite_transactions
from guild_service.api.utils.jwt import create_access_token
from guild_service.depends import get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = use_explicit_sqlite_transactions(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Independent sessions over the test database"""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from guild_service.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[UUID], Dict[str, str]]:
    """Build a bearer header for any user ID"""

    def build(user_id: UUID) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return build


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest_asyncio.fixture
async def guild(client, auth_headers, owner_id, test_data):
    """A guild created through the API by owner_id"""
    response = await client.post(
        "/guilds", json=test_data.get_copy("create_guild"), headers=auth_headers(owner_id)
    )
    assert response.status_code == 201
    return response.json()
