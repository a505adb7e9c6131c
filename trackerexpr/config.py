from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from typing import Callable

from dateutil import parser as date_parser
from dotenv import load_dotenv

from .context import DEFAULT_DATE_FORMAT

load_dotenv()


EnvGetter = Callable[[str], str | None]


def _str_env(*names: str, default: str = "", getenv: EnvGetter = os.getenv) -> str:
    for name in names:
        value = getenv(name)
        if value is not None:
            return value.strip()
    return default


def _int_env(
    name: str,
    default: int,
    minimum: int | None = None,
    maximum: int | None = None,
    *,
    getenv: EnvGetter = os.getenv,
) -> int:
    value = getenv(name)
    if value is None:
        parsed = default
    else:
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = default

    if minimum is not None and parsed < minimum:
        parsed = minimum
    if maximum is not None and parsed > maximum:
        parsed = maximum
    return parsed


def _parse_date(raw: object) -> date | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return date_parser.isoparse(raw.strip()).date()
    except ValueError:
        return None


def _date_env(name: str, *, getenv: EnvGetter = os.getenv) -> date | None:
    return _parse_date(getenv(name))


@dataclass(frozen=True)
class Settings:
    date_format: str
    start_date: date | None
    end_date: date | None
    max_template_chars: int
    log_level: str

    @classmethod
    def from_env(cls, *, getenv: EnvGetter = os.getenv) -> "Settings":
        return cls(
            date_format=_str_env(
                "TRACKER_DATE_FORMAT", "DATE_FORMAT", default=DEFAULT_DATE_FORMAT, getenv=getenv
            )
            or DEFAULT_DATE_FORMAT,
            start_date=_date_env("TRACKER_START_DATE", getenv=getenv),
            end_date=_date_env("TRACKER_END_DATE", getenv=getenv),
            max_template_chars=_int_env(
                "TRACKER_MAX_TEMPLATE_CHARS", 16000, minimum=256, maximum=100000, getenv=getenv
            ),
            log_level=_str_env("LOG_LEVEL", default="INFO", getenv=getenv).upper() or "INFO",
        )

    def validate(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(
                "TRACKER_START_DATE must not be after TRACKER_END_DATE "
                f"({self.start_date.isoformat()} > {self.end_date.isoformat()})"
            )
