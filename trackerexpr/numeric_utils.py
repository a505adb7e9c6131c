from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a number in expressions
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def as_int(value: Any) -> int | None:
    parsed = as_float(value)
    if parsed is None or not math.isfinite(parsed):
        return None
    return int(round(parsed))


def as_series_id(value: Any) -> int | None:
    """Return an integral id for ``value``, or None when it has a fractional part."""
    if not is_finite_number(value):
        return None
    if float(value) != int(value):
        return None
    return int(value)
