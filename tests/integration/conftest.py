import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  registers the tables
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import create_access_token
from src.depends import get_unit_of_work


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(session_factory):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth_headers(uid: str, email: str, name: str = None) -> dict:
    return {"Authorization": f"Bearer {create_access_token(uid, email, name)}"}


@pytest.fixture
def owner_headers():
    return auth_headers("owner-uid", "owner@acme.com", "Olivia Owner")


@pytest.fixture
def bob_headers():
    return auth_headers("bob-uid", "bob@example.com")


@pytest.fixture
def headers_for():
    return auth_headers


@pytest_asyncio.fixture
async def team_id(client, owner_headers):
    response = await client.post("/teams", json={"name": "Acme"}, headers=owner_headers)
    assert response.status_code == 201
    return response.json()["id"]


@pytest_asyncio.fixture
async def invite(client, owner_headers, team_id):
    response = await client.post(
        f"/teams/{team_id}/invitations",
        json={"email": "bob@example.com", "role": "member"},
        headers=owner_headers,
    )
    assert response.status_code == 201
    return response.json()
