from __future__ import annotations

from gridgas_admin.schemas.common import CamelModel


class RoleOut(CamelModel):
    role: str | None = None


class AppInfoOut(CamelModel):
    name: str
    version: str
    copyright: str


class BucketOut(CamelModel):
    ok: bool = True
    bucket: str
    created: bool
