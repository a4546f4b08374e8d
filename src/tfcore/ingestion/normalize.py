"""Normalization helpers.

Centralizes tolerant parsing of values read from persisted text and from
part modules.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None or math.isinf(parsed):
        return None
    return int(parsed)


def safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def non_negative_or_zero(value: Any) -> float:
    """Coerce *value* to a float clamped at zero; unreadable values become zero."""
    parsed = safe_float(value)
    if parsed is None or parsed < 0:
        return 0.0
    return parsed
