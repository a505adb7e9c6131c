"""Placeholder resolution for summary templates.

A template carries ``{{ expression }}`` or ``{{ expression :: format }}``
placeholders. Each distinct placeholder is parsed and evaluated once, in
discovery order; the first error aborts the whole resolution.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from .context import EvalContext
from .errors import ErrorKind, ExprError, ExpressionError
from .evaluator import evaluate
from .formatting import format_value
from .parsing import parse_expression
from .series import SeriesRegistry
from .values import describe, is_scalar_result

PLACEHOLDER_RE = re.compile(
    r"{{(?P<expr>[\w+\-*/0-9\s()\[\]%.,]+)(::(?P<format>[\w+\-*/0-9\s()\[\]%.:]+))?}}"
)
PURE_NUMBER_RE = re.compile(r"^(-?[0-9]+\.[0-9]+|-?[0-9]+)$")


@dataclass(frozen=True)
class PlaceholderMatch:
    source: str
    expression: str
    format: str | None


@dataclass(frozen=True)
class ResolvedPlaceholder:
    source: str
    value: float | date
    format: str | None


def find_placeholders(text: str) -> list[PlaceholderMatch]:
    matches: list[PlaceholderMatch] = []
    seen: set[str] = set()
    for match in PLACEHOLDER_RE.finditer(text):
        source = match.group(0)
        if source in seen:
            continue
        seen.add(source)
        fmt = match.group("format")
        fmt = fmt.strip() if fmt is not None else None
        matches.append(PlaceholderMatch(source, match.group("expr"), fmt or None))
    return matches


def resolve(
    text: str,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    logger: logging.Logger | None = None,
) -> list[ResolvedPlaceholder] | ExprError:
    local_logger = logger or logging.getLogger(__name__)
    context = context or EvalContext()
    resolved: list[ResolvedPlaceholder] = []
    for placeholder in find_placeholders(text):
        ast = parse_expression(placeholder.expression)
        if isinstance(ast, ExprError):
            return ast
        value = evaluate(ast, registry, context, logger=local_logger)
        if isinstance(value, ExprError):
            local_logger.debug("Placeholder %s failed: %s", placeholder.source, value.message)
            return value
        if not is_scalar_result(value):
            local_logger.warning(
                "Placeholder %s evaluated to a %s, which cannot be written into text",
                placeholder.source,
                describe(value),
            )
            continue
        local_logger.debug("Placeholder %s resolved to %r", placeholder.source, value)
        resolved.append(ResolvedPlaceholder(placeholder.source, value, placeholder.format))
    return resolved


def resolve_template(
    text: str,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    logger: logging.Logger | None = None,
) -> str | ExprError:
    context = context or EvalContext()
    resolved = resolve(text, registry, context, logger=logger)
    if isinstance(resolved, ExprError):
        return resolved

    for item in resolved:
        formatted = format_value(item.value, item.format, context.date_format)
        if isinstance(formatted, ExprError):
            return formatted
        if formatted:
            text = text.replace(item.source, formatted)
    return text


def resolve_value(
    text: str,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    logger: logging.Logger | None = None,
) -> float | date:
    """Resolve a single number or date, raising ``ExpressionError`` on failure."""
    text = text.strip()
    if PURE_NUMBER_RE.match(text):
        return float(text)

    resolved = resolve(text, registry, context, logger=logger)
    if isinstance(resolved, ExprError):
        raise ExpressionError(resolved)
    if not resolved:
        raise ExpressionError(ExprError(ErrorKind.UNRESOLVED, "failed to resolve value"))
    return resolved[0].value


def render_template(
    text: str,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    logger: logging.Logger | None = None,
) -> dict[str, Any]:
    result = resolve_template(text, registry, context, logger=logger)
    if isinstance(result, ExprError):
        return {
            "ok": False,
            "error": str(result),
            "error_kind": result.kind.value,
            "text": None,
        }
    return {
        "ok": True,
        "error": None,
        "error_kind": None,
        "text": result,
    }
