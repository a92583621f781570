"""Pytest configuration and fixtures.

The app runs against an in-memory SQLite database and a stubbed BaaS served
through ``httpx.MockTransport``; nothing leaves the process.
"""

import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SUPABASE_URL", "http://baas.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test-key")
os.environ.setdefault("APP_ENV", "test")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import gridgas_admin.domain  # noqa: F401  (registers every table on Base.metadata)
from gridgas_admin.core.security import AuthUser
from gridgas_admin.db.base import Base, get_db
from gridgas_admin.domain import AdminRole
from gridgas_admin.integrations.baas import BaasClient, get_baas_client
from gridgas_admin.main import create_app

ADMIN_ID = "11111111-1111-1111-1111-111111111111"
ADMIN_EMAIL = "ops@gridgas.test"
VALID_TOKEN = "good-token"


class BaasStub:
    """Scripted BaaS: ``(method, path) -> (status, body)`` plus a call log."""

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object]] = {
            ("GET", "/auth/v1/user"): (200, {"id": ADMIN_ID, "email": ADMIN_EMAIL}),
        }
        self.calls: list[tuple[str, str, object]] = []

    def set(self, method: str, path: str, status: int, body: object = None) -> None:
        self.routes[(method, path)] = (status, body)

    def calls_to(self, method: str, path: str) -> list[object]:
        return [payload for m, p, payload in self.calls if m == method and p == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        payload = json.loads(request.content) if request.content else None
        self.calls.append((method, path, payload))

        if path == "/auth/v1/user" and request.headers.get("authorization") != f"Bearer {VALID_TOKEN}":
            return httpx.Response(401, json={"msg": "invalid JWT"})

        status, body = self.routes.get((method, path), (404, {"message": "not found"}))
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def actor() -> AuthUser:
    return AuthUser(id=ADMIN_ID, email=ADMIN_EMAIL)


@pytest.fixture
def baas_stub() -> BaasStub:
    return BaasStub()


@pytest.fixture
def baas(baas_stub) -> BaasClient:
    return BaasClient("http://baas.test", "service-role-test-key", transport=httpx.MockTransport(baas_stub.handler))


@pytest.fixture
async def seed(session_factory):
    """Insert ORM rows in their own committed transaction."""

    async def _seed(*rows):
        async with session_factory() as s:
            s.add_all(rows)
            await s.commit()
        return rows[0] if len(rows) == 1 else rows

    return _seed


@pytest.fixture
async def admin_role(seed):
    """The calling admin's role; tests override it with ``set_role``."""
    return await seed(AdminRole(user_id=ADMIN_ID, role="super_admin"))


@pytest.fixture
def set_role(session_factory):
    async def _set_role(role: str | None):
        async with session_factory() as s:
            row = await s.get(AdminRole, ADMIN_ID)
            if role is None:
                if row is not None:
                    await s.delete(row)
            elif row is None:
                s.add(AdminRole(user_id=ADMIN_ID, role=role))
            else:
                row.role = role
            await s.commit()

    return _set_role


@pytest.fixture
async def client(session_factory, baas, admin_role):
    app = create_app()

    async def _get_db():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_baas_client] = lambda: baas

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"Authorization": f"Bearer {VALID_TOKEN}"},
    ) as http:
        yield http
