"""Lenient numeric parsing for console form input (numbers or numeric strings)."""

from __future__ import annotations

import math
from typing import Any

from gridgas_admin.core.exceptions import BadRequestError


def to_number(value: Any) -> float | None:
    """Coerce a JSON number or numeric string to float; ``None`` when not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        # float() accepts digit separators, form input must not
        if "_" in value:
            return None
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def is_finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def round_half_up(value: float, places: int = 3) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Render like a JSON number: ``3000`` not ``3000.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_positive_price(value: Any) -> float:
    if isinstance(value, str):
        if not value.strip():
            raise BadRequestError("Price is required.")
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadRequestError("Price must be a number.")

    n = to_number(value)
    if not is_finite(n):
        raise BadRequestError("Price must be a valid number.")
    if n <= 0:
        raise BadRequestError("Price must be greater than 0.")
    return n


def parse_non_negative(value: Any, label: str) -> float:
    """Optional non-negative number; missing or blank means 0."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise BadRequestError(f"{label} must be a number.")

    n = to_number(value)
    if not is_finite(n):
        raise BadRequestError(f"{label} must be a valid number.")
    if n < 0:
        raise BadRequestError(f"{label} must be 0 or greater.")
    return n
