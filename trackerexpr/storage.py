from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

from dateutil import parser as date_parser

from .numeric_utils import as_float, as_int
from .series import Series, SeriesRegistry, ValueKind


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp_path.replace(path)


def read_json(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def _parse_day(raw: Any, field: str) -> date:
    if not isinstance(raw, str):
        raise ValueError(f"'{field}' must be an ISO date string")
    try:
        return date_parser.isoparse(raw.strip()).date()
    except ValueError as exc:
        raise ValueError(f"'{field}' is not an ISO date: {raw!r}") from exc


def _registry_for(payload: dict[str, Any]) -> SeriesRegistry:
    raw_dates = payload.get("dates")
    if isinstance(raw_dates, list):
        return SeriesRegistry(_parse_day(raw, "dates") for raw in raw_dates)
    if "start_date" in payload and "end_date" in payload:
        return SeriesRegistry.for_range(
            _parse_day(payload["start_date"], "start_date"),
            _parse_day(payload["end_date"], "end_date"),
        )
    raise ValueError("Series payload needs either 'dates' or 'start_date'/'end_date'")


def _value_kind(raw: Any) -> ValueKind:
    if raw is None:
        return ValueKind.NUMBER
    try:
        return ValueKind(str(raw).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unknown value_kind {raw!r}") from exc


def load_series_registry(payload: dict[str, Any]) -> SeriesRegistry:
    """Build a registry from ``{"dates": [...], "series": [{...}, ...]}``.

    Each series entry holds ``id``, ``values`` (null marks a missing day) and
    optionally ``name``, ``value_kind``, ``x_axis`` and ``target_count``.
    """
    registry = _registry_for(payload)
    entries = payload.get("series")
    if not isinstance(entries, list):
        raise ValueError("Series payload needs a 'series' list")

    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Series entry {position} must be an object")
        series_id = as_int(entry.get("id", position))
        if series_id is None:
            raise ValueError(f"Series entry {position} has an invalid id")
        raw_values = entry.get("values") or []
        values: list[float | None] = []
        for raw in raw_values:
            parsed = None if raw is None else as_float(raw)
            if raw is not None and parsed is None:
                raise ValueError(f"Series {series_id} has a non-numeric value {raw!r}")
            values.append(parsed)
        if len(values) != len(registry.dates):
            raise ValueError(
                f"Series {series_id} has {len(values)} value(s) for {len(registry.dates)} date(s)"
            )
        registry.add(
            Series(
                registry.dates,
                values,
                series_id=series_id,
                name=str(entry.get("name") or f"dataset{series_id}"),
                value_kind=_value_kind(entry.get("value_kind")),
                used_as_x=bool(entry.get("x_axis", False)),
                target_count=as_int(entry.get("target_count")) or 0,
            )
        )
    return registry


def load_series_registry_file(path: Path) -> SeriesRegistry:
    payload = read_json(path)
    if payload is None:
        raise ValueError(f"Could not read series file {path}")
    return load_series_registry(payload)
