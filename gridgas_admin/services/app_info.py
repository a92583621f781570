"""About-screen metadata read from the installed distribution."""

from datetime import datetime, timezone
from importlib import metadata

DISTRIBUTION = "gridgas-admin"
DEFAULT_NAME = "GridGas Board"
DEFAULT_VERSION = "0.0.0"
DEFAULT_HOLDER = "GridGas"


def get_app_info(distribution: str = DISTRIBUTION) -> dict[str, str]:
    try:
        meta = metadata.metadata(distribution)
    except metadata.PackageNotFoundError:
        meta = None

    name = ((meta.get("Name") if meta else None) or "").strip() or DEFAULT_NAME
    version = ((meta.get("Version") if meta else None) or "").strip() or DEFAULT_VERSION
    year = datetime.now(timezone.utc).year
    return {"name": name, "version": version, "copyright": f"© {year} {DEFAULT_HOLDER}"}
