from __future__ import annotations

import re
from datetime import date, datetime
from typing import Callable

from .errors import ErrorKind, ExprError

ISO_8601 = "iso-8601"

# Longest tokens first so "YYYY" wins over "YY" and "MMMM" over "MM".
_DATE_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a"
)


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _hour_12(value: datetime) -> int:
    return value.hour % 12 or 12


_DATE_TOKENS: dict[str, Callable[[datetime], str]] = {
    "YYYY": lambda d: f"{d.year:04d}",
    "YY": lambda d: f"{d.year % 100:02d}",
    "MMMM": lambda d: d.strftime("%B"),
    "MMM": lambda d: d.strftime("%b"),
    "MM": lambda d: f"{d.month:02d}",
    "M": lambda d: str(d.month),
    "Do": lambda d: _ordinal(d.day),
    "DD": lambda d: f"{d.day:02d}",
    "D": lambda d: str(d.day),
    "dddd": lambda d: d.strftime("%A"),
    "ddd": lambda d: d.strftime("%a"),
    "HH": lambda d: f"{d.hour:02d}",
    "H": lambda d: str(d.hour),
    "hh": lambda d: f"{_hour_12(d):02d}",
    "h": lambda d: str(_hour_12(d)),
    "mm": lambda d: f"{d.minute:02d}",
    "m": lambda d: str(d.minute),
    "ss": lambda d: f"{d.second:02d}",
    "s": lambda d: str(d.second),
    "A": lambda d: "AM" if d.hour < 12 else "PM",
    "a": lambda d: "am" if d.hour < 12 else "pm",
}


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def format_date(value: date, fmt: str) -> str:
    """Format ``value`` with a moment-style pattern such as ``YYYY-MM-DD``.

    Text inside square brackets is copied literally, ``iso-8601`` yields the
    ISO representation.
    """
    if fmt.strip().lower() == ISO_8601:
        return value.isoformat()
    moment = _as_datetime(value)

    def _render(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return _DATE_TOKENS[token](moment)

    return _DATE_TOKEN_RE.sub(_render, fmt)


def format_number(value: float, fmt: str | None = None) -> str | ExprError:
    """printf-style formatting; ``fmt`` omits the leading ``%``."""
    if not fmt:
        return f"{value:.1f}"
    try:
        return ("%" + fmt) % value
    except (TypeError, ValueError, OverflowError) as exc:
        return ExprError(ErrorKind.FORMAT_ERROR, f"Invalid number format '{fmt}': {exc}")


def format_value(value: float | date, fmt: str | None, default_date_format: str) -> str | ExprError:
    if isinstance(value, date):
        return format_date(value, fmt or default_date_format)
    return format_number(value, fmt)
