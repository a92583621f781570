"""Routers package: HTTP endpoint definitions.

Files:
  admin/   Console routes (/api/admin/*)
"""
