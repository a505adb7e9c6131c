from __future__ import annotations

import logging
from typing import Any

from .context import EvalContext
from .errors import ExprError
from .evaluator import evaluate
from .parsing import parse_expression
from .resolver import PLACEHOLDER_RE, find_placeholders, render_template
from .series import SeriesRegistry
from .values import describe, is_scalar_result

MAX_TEMPLATE_CHARS = 16000

__all__ = [
    "MAX_TEMPLATE_CHARS",
    "lint_template_text",
    "render_template",
    "validate_and_render",
    "validate_template_text",
]


def lint_template_text(
    template_text: str,
    *,
    max_chars: int = MAX_TEMPLATE_CHARS,
) -> tuple[list[str], list[str]]:
    warnings: list[str] = []
    errors: list[str] = []

    if len(template_text) > max_chars:
        errors.append(f"Template is too large ({len(template_text)} chars). Max allowed: {max_chars}.")

    opened = template_text.count("{{")
    closed = template_text.count("}}")
    if opened != closed:
        errors.append(f"Template has {opened} '{{{{' but {closed} '}}}}' delimiter(s).")

    matched = len(PLACEHOLDER_RE.findall(template_text))
    if matched < min(opened, closed):
        warnings.append(
            f"Template has {min(opened, closed) - matched} placeholder(s) with unsupported characters; "
            "they will be left as plain text."
        )

    return warnings, errors


def validate_template_text(
    template_text: str,
    registry: SeriesRegistry | None = None,
    context: EvalContext | None = None,
    *,
    max_chars: int = MAX_TEMPLATE_CHARS,
) -> dict[str, Any]:
    warnings, errors = lint_template_text(template_text, max_chars=max_chars)
    placeholders = [placeholder.source for placeholder in find_placeholders(template_text)]

    if errors:
        return {
            "valid": False,
            "errors": errors,
            "warnings": warnings,
            "placeholders": placeholders,
        }

    for placeholder in find_placeholders(template_text):
        ast = parse_expression(placeholder.expression)
        if isinstance(ast, ExprError):
            errors.append(f"{placeholder.source}: {ast.message}")
            continue
        if registry is None:
            continue
        value = evaluate(ast, registry, context)
        if isinstance(value, ExprError):
            errors.append(f"{placeholder.source}: {value.message}")
        elif not is_scalar_result(value):
            warnings.append(f"{placeholder.source} evaluates to a {describe(value)} and will not be substituted.")

    if registry is None:
        warnings.append("No series registry was provided for runtime validation.")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "placeholders": placeholders,
    }


def validate_and_render(
    template_text: str,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    max_chars: int = MAX_TEMPLATE_CHARS,
    logger: logging.Logger | None = None,
) -> dict[str, Any]:
    validation = validate_template_text(template_text, registry, context, max_chars=max_chars)
    if not validation.get("valid"):
        return {
            "ok": False,
            "validation": validation,
            "render": None,
        }

    render_result = render_template(template_text, registry, context, logger=logger)
    return {
        "ok": bool(render_result.get("ok")),
        "validation": validation,
        "render": render_result,
    }
