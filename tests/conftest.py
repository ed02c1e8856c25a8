import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="wasla-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/wasla_test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from httpx import AsyncClient, ASGITransport

from wasla.database import engine, Base, AsyncSessionLocal
from wasla.main import app
from wasla.middleware.auth import hash_password
from wasla.models.user import User, UserRole
from wasla.services.tenant_service import seed_default_tenant

ADMIN = {"username": "admin", "password": "admin123"}


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        await seed_default_tenant(session)
    yield
    await engine.dispose()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as c:
        yield c


async def login(client, username, password, slug=None):
    headers = {"X-Tenant-Slug": slug} if slug else {}
    r = await client.post("/api/v1/auth/login", json={"username": username, "password": password}, headers=headers)
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client):
    return await login(client, ADMIN["username"], ADMIN["password"])


async def add_user(db, tenant_id, username, role, password="secret123"):
    user = User(
        tenant_id=tenant_id,
        name=username.title(),
        username=username,
        hashed_password=hash_password(password),
        role=role,
        permissions=[],
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def other_tenant(client):
    """A second network registered through the public signup."""
    r = await client.post("/api/v1/auth/register-tenant", json={
        "name": "شبكة النور",
        "slug": "alnoor",
        "owner_name": "Owner",
        "owner_username": "owner",
        "owner_password": "owner123",
    })
    assert r.status_code == 201, r.text
    tenant = r.json()
    tenant["headers"] = await login(client, "owner", "owner123", slug="alnoor")
    return tenant


@pytest.fixture
def make_subscriber(client, admin_headers):
    async def _make(headers=None, **overrides):
        payload = {
            "name": "أحمد محمد",
            "phone": "0591234567",
            "start_date": "2026-01-01",
            "expire_date": "2099-01-01",
            "speed": 20,
        }
        payload.update(overrides)
        r = await client.post("/api/v1/subscribers/", json=payload, headers=headers or admin_headers)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
