from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"


@dataclass(frozen=True)
class EvalContext:
    """Caller defaults consulted while evaluating and formatting expressions."""

    date_format: str = DEFAULT_DATE_FORMAT
    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> EvalContext:
        return cls(
            date_format=getattr(settings, "date_format", None) or DEFAULT_DATE_FORMAT,
            start_date=getattr(settings, "start_date", None),
            end_date=getattr(settings, "end_date", None),
        )
