"""Services package: all business logic lives here, never in routers.

Files:
  vend.py               Manual vend (purchase, token, send)
  pricing.py            Global tariff and per-building overrides
  audit.py              Admin audit log writer used by every mutation
  admins.py             Console staff accounts (super admin only)

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. Services only take ``Request`` for audit context.
"""
