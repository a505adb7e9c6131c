from __future__ import annotations

from .context import DEFAULT_DATE_FORMAT, EvalContext
from .errors import ErrorKind, ExprError, ExpressionError
from .evaluator import evaluate
from .parsing import parse_expression
from .resolver import (
    find_placeholders,
    render_template,
    resolve,
    resolve_template,
    resolve_value,
)
from .series import DataPoint, Series, SeriesRegistry, ValueKind

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "DataPoint",
    "ErrorKind",
    "EvalContext",
    "ExprError",
    "ExpressionError",
    "Series",
    "SeriesRegistry",
    "ValueKind",
    "evaluate",
    "find_placeholders",
    "parse_expression",
    "render_template",
    "resolve",
    "resolve_template",
    "resolve_value",
]
