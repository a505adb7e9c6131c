from __future__ import annotations

from typing import Any, Callable, Sequence

from .context import EvalContext
from .errors import ErrorKind, ExprError, type_error
from .numeric_utils import is_finite_number
from .series import Series
from .values import Result

SeriesToSeries = Callable[[Series, Sequence[Any], EvalContext], Result]


def normalize(series: Series, _args: Sequence[Any], _context: EvalContext) -> Result:
    y_min = series.y_min
    y_max = series.y_max
    if y_min is None or y_max is None or y_max <= y_min:
        return ExprError(ErrorKind.INVALID_RANGE, "invalid data range for function 'normalize'")
    span = y_max - y_min
    return series.with_values([None if value is None else (value - y_min) / span for value in series.values])


def set_missing_values(series: Series, args: Sequence[Any], _context: EvalContext) -> Result:
    if not args or not is_finite_number(args[0]):
        return type_error("invalid arguments for function 'setMissingValues'")
    filled = series.clone()
    filled.fill_missing(float(args[0]))
    return filled


SERIES_TO_SERIES: dict[str, SeriesToSeries] = {
    "normalize": normalize,
    "setMissingValues": set_missing_values,
}
