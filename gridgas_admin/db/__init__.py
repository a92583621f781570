"""Database package: async SQLAlchemy engine, session factory, Base."""
from gridgas_admin.db.base import Base, async_session_factory, engine, get_db

__all__ = ["Base", "async_session_factory", "engine", "get_db"]
