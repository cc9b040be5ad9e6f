import asyncio
import os
from dataclasses import dataclass

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-dashboard-tests-0001")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from retail_dashboard.core.db.base import Base
from retail_dashboard.core.db.engine import (
    build_engine,
    build_session_factory,
    get_db_util,
    get_session_factory,
)
from retail_dashboard.core.db.models import Location, Organization, Profile
from retail_dashboard.main import app
from retail_dashboard.modules.profiles.auth import AuthService
from retail_dashboard.modules.profiles.models import Role


async def _create_schema(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}")
    asyncio.run(_create_schema(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def seed(session_factory):
    """Persist the given model instances in one commit and return them."""

    def _seed(*objects):
        async def _run():
            async with session_factory() as db:
                db.add_all(objects)
                await db.commit()

        asyncio.run(_run())
        return objects if len(objects) > 1 else objects[0]

    return _seed


@dataclass
class World:
    org: Organization
    other_org: Organization
    store: Location
    warehouse: Location
    other_store: Location
    cashier: Profile
    other_cashier: Profile
    newcomer: Profile


@pytest.fixture
def world(seed) -> World:
    org, other_org = seed(Organization(name="Tienda Sol"), Organization(name="Otra Tienda"))
    store, warehouse, other_store = seed(
        Location(organization_id=org.id, name="Centro"),
        Location(organization_id=org.id, name="Almacén"),
        Location(organization_id=other_org.id, name="Norte"),
    )
    cashier, other_cashier, newcomer = seed(
        Profile(username="ana", full_name="Ana Pérez", role=Role.STAFF, organization_id=org.id),
        Profile(username="luis", full_name="Luis Rojas", role=Role.STAFF, organization_id=other_org.id),
        Profile(username="nuevo", full_name="Sin Asignar", role=Role.STAFF, organization_id=None),
    )
    return World(org, other_org, store, warehouse, other_store, cashier, other_cashier, newcomer)


def _token_for(profile: Profile, **kwargs) -> str:
    return AuthService.create_access_token(
        {"sub": profile.username, "user_id": profile.id, "role": profile.role.value},
        **kwargs,
    )


@pytest.fixture
def token_for():
    return _token_for


@pytest.fixture
def auth_headers():
    def _headers(profile: Profile) -> dict:
        return {"Authorization": f"Bearer {_token_for(profile)}"}

    return _headers


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_util] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
