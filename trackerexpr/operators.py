from __future__ import annotations

import math
import operator
from enum import Enum
from typing import Any, Callable

from .errors import (
    ExprError,
    alignment_error,
    divide_by_zero_error,
    invalid_operand_error,
    operation_error,
)
from .numeric_utils import is_number
from .series import Series
from .values import Result, is_operand


class UnaryOperator(str, Enum):
    NEGATIVE = "-"
    POSITIVE = "+"


class BinaryOperator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MOD = "%"


ScalarOp = Callable[[float, float], float]


def _remainder(dividend: float, divisor: float) -> float:
    # remainder keeps the sign of the dividend; an infinite dividend has none
    if math.isinf(dividend):
        return math.nan
    return math.fmod(dividend, divisor)


_SCALAR_OPS: dict[BinaryOperator, ScalarOp] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUBTRACT: operator.sub,
    BinaryOperator.MULTIPLY: operator.mul,
    BinaryOperator.DIVIDE: operator.truediv,
    BinaryOperator.MOD: _remainder,
}

_DIVISION_OPS = frozenset({BinaryOperator.DIVIDE, BinaryOperator.MOD})


def is_divisor_valid(divisor: Any) -> bool:
    if is_number(divisor):
        return divisor != 0
    if isinstance(divisor, Series):
        return all(value != 0 for value in divisor.present_values())
    return True


def validate_binary_operands(left: Any, right: Any) -> ExprError | None:
    if not is_operand(left) or not is_operand(right):
        return invalid_operand_error()
    return None


def _broadcast_left(scalar: float, series: Series, op: ScalarOp) -> Series:
    return series.with_values([None if value is None else op(scalar, value) for value in series.values])


def _broadcast_right(series: Series, scalar: float, op: ScalarOp) -> Series:
    return series.with_values([None if value is None else op(value, scalar) for value in series.values])


def _combine(left: Series, right: Series, op: ScalarOp) -> Series:
    combined: list[float | None] = []
    for lhs, rhs in zip(left.values, right.values):
        if lhs is None or rhs is None:
            combined.append(None)
        else:
            combined.append(op(lhs, rhs))
    return left.with_values(combined)


def apply_binary(op: BinaryOperator | str, left: Any, right: Any) -> Result:
    try:
        op = BinaryOperator(op)
    except ValueError:
        return operation_error(str(op))

    invalid = validate_binary_operands(left, right)
    if invalid is not None:
        return invalid

    if op in _DIVISION_OPS and not is_divisor_valid(right):
        return divide_by_zero_error()

    scalar_op = _SCALAR_OPS[op]
    if is_number(left) and is_number(right):
        return float(scalar_op(float(left), float(right)))
    if is_number(left) and isinstance(right, Series):
        return _broadcast_left(float(left), right, scalar_op)
    if isinstance(left, Series) and is_number(right):
        return _broadcast_right(left, float(right), scalar_op)
    if isinstance(left, Series) and isinstance(right, Series):
        if len(left) != len(right) or not left.shares_axis_with(right):
            return alignment_error(op.value)
        return _combine(left, right, scalar_op)
    return operation_error(op.value)


def apply_unary(op: UnaryOperator | str, operand: Any) -> Result:
    try:
        op = UnaryOperator(op)
    except ValueError:
        return operation_error(str(op))

    if op is UnaryOperator.NEGATIVE:
        if is_number(operand):
            return -float(operand)
        if isinstance(operand, Series):
            return operand.with_values([None if value is None else -value for value in operand.values])
        return operation_error(op.value)

    if is_number(operand):
        return float(operand)
    if isinstance(operand, Series):
        return operand.clone()
    return operation_error(op.value)
