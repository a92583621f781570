"""SQLAlchemy ORM models for console staff: roles, PIN access and preferences.

Console users themselves live in the BaaS auth schema; these tables are keyed
by that auth user id.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import TimestampMixin


class AdminRole(Base, TimestampMixin):
    __tablename__ = "admin_roles"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # "super_admin" | "admin" | "support" | "fm_viewer"
    role: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    assigned_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class AdminPasswordedAccess(Base, TimestampMixin):
    """bcrypt PIN hash granting access to PIN-gated console sections."""

    __tablename__ = "admin_passworded_access"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    pin_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    granted_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class AdminUserPreferences(Base, TimestampMixin):
    __tablename__ = "admin_user_preferences"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    preferences: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
