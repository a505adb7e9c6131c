from __future__ import annotations

import logging
from typing import Any

from .analytics import SERIES_TO_VALUE
from .context import EvalContext
from .errors import (
    ExprError,
    bare_identifier_error,
    no_dataset_error,
    parse_error,
    type_error,
    unknown_function_error,
)
from .numeric_utils import as_series_id, is_number
from .operators import apply_binary, apply_unary, validate_binary_operands
from .parsing import AstNode, Binary, Call, Identifier, Literal, Unary
from .series import Series, SeriesRegistry
from .transforms import SERIES_TO_SERIES
from .values import Result, describe

DATASET_FUNCTION = "dataset"


def is_library_function(name: str) -> bool:
    return name == DATASET_FUNCTION or name in SERIES_TO_VALUE or name in SERIES_TO_SERIES


def _literal_value(value: Any) -> Any:
    # int literals join the float number domain; bool/str/None stay raw and
    # are rejected wherever an operand is required.
    if is_number(value):
        return float(value)
    return value


def _evaluate_arguments(
    arguments: tuple[AstNode, ...],
    registry: SeriesRegistry,
    context: EvalContext,
    local_logger: logging.Logger,
) -> list[Any] | ExprError:
    values: list[Any] = []
    for argument in arguments:
        value = _evaluate(argument, registry, context, local_logger)
        if isinstance(value, ExprError):
            return value
        values.append(value)
    return values


def _call_dataset(args: list[Any], registry: SeriesRegistry) -> Result:
    if len(args) != 1 or not is_number(args[0]):
        return type_error(f"Function '{DATASET_FUNCTION}' expects exactly one numeric id")
    series_id = as_series_id(args[0])
    series = registry.get(series_id) if series_id is not None else None
    if series is None:
        return no_dataset_error(f"No dataset found for id '{args[0]:g}'")
    return series


def _call_series_to_value(
    name: str,
    args: list[Any],
    registry: SeriesRegistry,
    context: EvalContext,
) -> Result:
    if len(args) > 1:
        return type_error(f"Too many arguments for function '{name}'")
    if not args:
        series = registry.default_series()
        if series is None:
            return no_dataset_error(f"No dataset found for function '{name}'")
    else:
        series = args[0]
        if not isinstance(series, Series):
            return type_error(f"Function '{name}' expects a dataset argument, got {describe(series)}")
    return SERIES_TO_VALUE[name](series, context)


def _call_series_to_series(name: str, args: list[Any], context: EvalContext) -> Result:
    if not args:
        return type_error(f"Function '{name}' expects a dataset argument")
    series = args[0]
    if not isinstance(series, Series):
        return type_error(f"Function '{name}' expects a dataset argument, got {describe(series)}")
    return SERIES_TO_SERIES[name](series, args[1:], context)


def _evaluate(
    node: AstNode,
    registry: SeriesRegistry,
    context: EvalContext,
    local_logger: logging.Logger,
) -> Result | Any:
    if isinstance(node, Literal):
        return _literal_value(node.value)

    if isinstance(node, Identifier):
        if is_library_function(node.name):
            return bare_identifier_error(node.name)
        return unknown_function_error(node.name)

    if isinstance(node, Unary):
        operand = _evaluate(node.argument, registry, context, local_logger)
        if isinstance(operand, ExprError):
            return operand
        return apply_unary(node.operator, operand)

    if isinstance(node, Binary):
        left = _evaluate(node.left, registry, context, local_logger)
        if isinstance(left, ExprError):
            return left
        right = _evaluate(node.right, registry, context, local_logger)
        if isinstance(right, ExprError):
            return right
        invalid = validate_binary_operands(left, right)
        if invalid is not None:
            return invalid
        return apply_binary(node.operator, left, right)

    if isinstance(node, Call):
        args = _evaluate_arguments(node.arguments, registry, context, local_logger)
        if isinstance(args, ExprError):
            return args
        local_logger.debug("Calling '%s' with %d argument(s)", node.name, len(args))
        if node.name == DATASET_FUNCTION:
            return _call_dataset(args, registry)
        if node.name in SERIES_TO_VALUE:
            return _call_series_to_value(node.name, args, registry, context)
        if node.name in SERIES_TO_SERIES:
            return _call_series_to_series(node.name, args, context)
        return unknown_function_error(node.name)

    return parse_error(f"Unknown expression node '{type(node).__name__}'")


def evaluate(
    node: AstNode,
    registry: SeriesRegistry,
    context: EvalContext | None = None,
    *,
    logger: logging.Logger | None = None,
) -> Result | Any:
    """Evaluate ``node`` against ``registry``.

    Returns a number (float), a date, a Series or an ``ExprError``. A bare
    literal that is not a number (bool, string) is returned as is; it only
    becomes an error once it is used as an operand.
    """
    local_logger = logger or logging.getLogger(__name__)
    return _evaluate(node, registry, context or EvalContext(), local_logger)
