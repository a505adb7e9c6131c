from __future__ import annotations

from datetime import date
from typing import Any, Union

from .errors import ExprError
from .numeric_utils import is_number
from .series import Series

# float for numbers, date (or datetime) for temporal values.
Value = Union[float, date, Series]
Result = Union[float, date, Series, ExprError]


def is_error(value: Any) -> bool:
    return isinstance(value, ExprError)


def is_temporal(value: Any) -> bool:
    return isinstance(value, date)


def is_series(value: Any) -> bool:
    return isinstance(value, Series)


def is_operand(value: Any) -> bool:
    return is_number(value) or is_temporal(value) or is_series(value)


def is_scalar_result(value: Any) -> bool:
    """Only numbers and dates can be written back into template text."""
    return is_number(value) or is_temporal(value)


def describe(value: Any) -> str:
    if is_series(value):
        return "dataset"
    if is_temporal(value):
        return "date"
    if is_number(value):
        return "number"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "none"
    return type(value).__name__
