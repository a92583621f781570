"""Console session helpers: caller role lookup and the shared unlock PIN."""

import hmac
from typing import Any

from gridgas_admin.core.config import settings


def verify_console_pin(pin: Any) -> dict[str, bool]:
    """Check *pin* against ``ADMIN_PIN``. An unset PIN disables the gate."""
    admin_pin = (settings.admin_pin or "").strip()
    if not admin_pin:
        return {"ok": True, "disabled": True}

    candidate = pin if isinstance(pin, str) else ""
    if not candidate or not hmac.compare_digest(candidate.encode("utf-8"), admin_pin.encode("utf-8")):
        return {"ok": False}
    return {"ok": True}
