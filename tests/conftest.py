"""
Pytest configuration and shared fixtures.

API tests run the app in-process against a throwaway SQLite file per test;
the ``get_db`` dependency is overridden to use it.
"""

import os

# Settings require DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./backoffice-test.db")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backoffice.core.jwt import create_access_token
from backoffice.core.permissions import Roles
from backoffice.db.base import Base
from backoffice.db.session import build_engine, build_session_maker, get_db, session_scope
from backoffice.main import app
from backoffice.models import Role


ROLE_NAMES = Roles.ALL


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


def make_token(role: str, user_id: int = 1, name: str = "Test User", email: str = "user@test.com") -> str:
    return create_access_token({"id": user_id, "name": name, "email": email, "role": role})


def auth_headers(role: str, user_id: int = 1) -> dict:
    return {"Authorization": f"Bearer {make_token(role, user_id=user_id)}"}


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    """Fresh schema (plus the four roles) in a per-test SQLite file."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'backoffice.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = build_session_maker(engine)
    async with session_scope(maker) as db:
        db.add_all([Role(name=name) for name in ROLE_NAMES])

    yield maker
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return auth_headers(Roles.ADMIN)


@pytest.fixture
def recruiter_headers():
    return auth_headers(Roles.RECRUITER)


@pytest_asyncio.fixture
async def org(client, admin_headers):
    """A company with one management unit."""
    company = await client.post("/company", json={"name": "Acme"}, headers=admin_headers)
    assert company.status_code == 201, company.text
    management = await client.post(
        "/management",
        json={"name": "TI", "company_id": company.json()["id"]},
        headers=admin_headers,
    )
    assert management.status_code == 201, management.text
    return {"company_id": company.json()["id"], "management_id": management.json()["id"]}


@pytest_asyncio.fixture
async def pipeline(client, recruiter_headers, org):
    """An open process with three candidates in interviews."""
    process = await client.post(
        "/process",
        json={"job_offer": "Backend Developer", "management_id": org["management_id"]},
        headers=recruiter_headers,
    )
    assert process.status_code == 201, process.text
    process_id = process.json()["id"]

    candidate_ids = []
    for index, name in enumerate(("Ana", "Bruno", "Carla")):
        created = await client.post(
            "/candidates",
            json={
                "name": name,
                "email": f"{name.lower()}@example.com",
                "phone": f"+5690000000{index}",
                "process_id": process_id,
                "match_percent": 70 + index,
            },
            headers=recruiter_headers,
        )
        assert created.status_code == 201, created.text
        candidate_ids.append(created.json()["candidate"]["id"])

    return {**org, "process_id": process_id, "candidate_ids": candidate_ids}


@pytest.fixture
def headers_for():
    """``headers_for(role, user_id=1)`` -> Authorization header for that caller."""
    return auth_headers
