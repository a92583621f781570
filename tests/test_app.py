"""Application startup against local and hosted databases."""

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from gridgas_admin import main
from gridgas_admin.core.config import settings


async def test_startup_creates_tables_in_fresh_sqlite_file(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'gridgas_dev.db'}"
    local_engine = create_async_engine(url)
    monkeypatch.setattr(settings, "database_url", url)
    monkeypatch.setattr(main, "engine", local_engine)

    app = main.create_app()
    async with app.router.lifespan_context(app):
        async with local_engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))

    assert {"meters", "asset_assignments", "tariff_settings", "admin_roles", "admin_audit_log"} <= tables


async def test_startup_leaves_hosted_schema_alone(monkeypatch):
    calls = []

    async def record(bind):
        calls.append(bind)

    class IdleEngine:
        async def dispose(self):
            pass

    monkeypatch.setattr(settings, "database_url", "postgresql+asyncpg://db.internal/gridgas")
    monkeypatch.setattr(main, "engine", IdleEngine())
    monkeypatch.setattr(main, "create_local_schema", record)

    app = main.create_app()
    async with app.router.lifespan_context(app):
        pass

    assert calls == []
