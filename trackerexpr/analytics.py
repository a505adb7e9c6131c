"""Reductions from a series to a number or a date.

Every function takes ``(series, context)`` and returns a value or an
``ExprError``. Absent days are ignored unless the function counts them.
"""
from __future__ import annotations

import statistics
from datetime import date
from typing import Callable

from .context import EvalContext
from .errors import (
    ErrorKind,
    ExprError,
    deprecated_function_error,
    divide_by_zero_error,
    no_data_error,
)
from .series import Series
from .values import Result

SeriesToValue = Callable[[Series, EvalContext], Result]


def _no_run_error(message: str) -> ExprError:
    return ExprError(ErrorKind.NO_STREAK_OR_BREAK, message)


def _longest_run(series: Series, *, present: bool, prefer_later: bool) -> tuple[int, date | None, date | None]:
    """Scan forward for the longest run of present (or absent) days.

    With ``prefer_later`` a run equal in length to the recorded one replaces
    it, otherwise the earliest longest run is kept.
    """
    best_length = 0
    best_start: date | None = None
    best_end: date | None = None
    length = 0
    run_start: date | None = None
    for point in series:
        if point.is_present != present:
            length = 0
            continue
        if length == 0:
            run_start = point.date
        length += 1
        if length > best_length or (prefer_later and length == best_length):
            best_length = length
            best_start = run_start
            best_end = point.date
    return best_length, best_start, best_end


def _trailing_run(series: Series, *, present: bool) -> tuple[int, date | None, date | None]:
    """Scan backward from the most recent day while days match ``present``."""
    length = 0
    start: date | None = None
    end: date | None = None
    for point in reversed(series.points):
        if point.is_present != present:
            break
        if length == 0:
            end = point.date
        start = point.date
        length += 1
    return length, start, end


def series_min(series: Series, _context: EvalContext) -> Result:
    if series.y_min is None:
        return no_data_error("Min value not found")
    return series.y_min


def series_max(series: Series, _context: EvalContext) -> Result:
    if series.y_max is None:
        return no_data_error("Max value not found")
    return series.y_max


def _latest_date_of(series: Series, target: float) -> date | None:
    for point in reversed(series.points):
        if point.value is not None and point.value == target:
            return point.date
    return None


def min_date(series: Series, _context: EvalContext) -> Result:
    found = None if series.y_min is None else _latest_date_of(series, series.y_min)
    if found is None:
        return no_data_error("Min date not found")
    return found


def max_date(series: Series, _context: EvalContext) -> Result:
    found = None if series.y_max is None else _latest_date_of(series, series.y_max)
    if found is None:
        return no_data_error("Max date not found")
    return found


def start_date(series: Series, context: EvalContext) -> Result:
    found = series.start_date or context.start_date
    if found is None:
        return no_data_error("Start date not found")
    return found


def end_date(series: Series, context: EvalContext) -> Result:
    found = series.end_date or context.end_date
    if found is None:
        return no_data_error("End date not found")
    return found


def series_sum(series: Series, _context: EvalContext) -> Result:
    return float(sum(series.present_values()))


def num_targets(series: Series, _context: EvalContext) -> Result:
    return float(series.target_count)


def num_days(series: Series, _context: EvalContext) -> Result:
    return float(len(series))


def num_days_having_data(series: Series, _context: EvalContext) -> Result:
    return float(series.non_null_count)


def max_streak(series: Series, _context: EvalContext) -> Result:
    length, _, _ = _longest_run(series, present=True, prefer_later=True)
    return float(length)


def max_streak_start(series: Series, _context: EvalContext) -> Result:
    _, start, _ = _longest_run(series, present=True, prefer_later=True)
    if start is None:
        return _no_run_error("No streak found, no start found")
    return start


def max_streak_end(series: Series, _context: EvalContext) -> Result:
    _, _, end = _longest_run(series, present=True, prefer_later=True)
    if end is None:
        return _no_run_error("No streak found, no end found")
    return end


def max_breaks(series: Series, _context: EvalContext) -> Result:
    length, _, _ = _longest_run(series, present=False, prefer_later=False)
    return float(length)


def max_breaks_start(series: Series, _context: EvalContext) -> Result:
    _, start, _ = _longest_run(series, present=False, prefer_later=False)
    if start is None:
        return _no_run_error("No break found, no start found")
    return start


def max_breaks_end(series: Series, _context: EvalContext) -> Result:
    _, _, end = _longest_run(series, present=False, prefer_later=False)
    if end is None:
        return _no_run_error("No break found, no end found")
    return end


def current_streak(series: Series, _context: EvalContext) -> Result:
    length, _, _ = _trailing_run(series, present=True)
    return float(length)


def current_streak_start(series: Series, _context: EvalContext) -> Result:
    _, start, _ = _trailing_run(series, present=True)
    if start is None:
        return _no_run_error("Current streak is broken, no start found")
    return start


def current_streak_end(series: Series, _context: EvalContext) -> Result:
    _, _, end = _trailing_run(series, present=True)
    if end is None:
        return _no_run_error("Current streak is broken, no end found")
    return end


def current_breaks(series: Series, _context: EvalContext) -> Result:
    length, _, _ = _trailing_run(series, present=False)
    return float(length)


def current_breaks_start(series: Series, _context: EvalContext) -> Result:
    _, start, _ = _trailing_run(series, present=False)
    if start is None:
        return _no_run_error("No current break, no start found")
    return start


def current_breaks_end(series: Series, _context: EvalContext) -> Result:
    _, _, end = _trailing_run(series, present=False)
    if end is None:
        return _no_run_error("No current break, no end found")
    return end


def average(series: Series, _context: EvalContext) -> Result:
    if series.non_null_count == 0:
        return divide_by_zero_error()
    return sum(series.present_values()) / series.non_null_count


def median(series: Series, _context: EvalContext) -> Result:
    values = series.present_values()
    if not values:
        return no_data_error("Median not found, dataset has no values")
    return float(statistics.median(values))


def variance(series: Series, _context: EvalContext) -> Result:
    values = series.present_values()
    if len(values) < 2:
        return no_data_error("Variance needs at least two values")
    return float(statistics.variance(values))


def _deprecated(name: str) -> SeriesToValue:
    def _reject(_series: Series, _context: EvalContext) -> Result:
        return deprecated_function_error(name)

    return _reject


DEPRECATED_FUNCTIONS = ("count", "days", "lastStreak")

SERIES_TO_VALUE: dict[str, SeriesToValue] = {
    "min": series_min,
    "minDate": min_date,
    "max": series_max,
    "maxDate": max_date,
    "startDate": start_date,
    "endDate": end_date,
    "sum": series_sum,
    "numTargets": num_targets,
    "numDays": num_days,
    "numDaysHavingData": num_days_having_data,
    "maxStreak": max_streak,
    "maxStreakStart": max_streak_start,
    "maxStreakEnd": max_streak_end,
    "maxBreaks": max_breaks,
    "maxBreaksStart": max_breaks_start,
    "maxBreaksEnd": max_breaks_end,
    "currentStreak": current_streak,
    "currentStreakStart": current_streak_start,
    "currentStreakEnd": current_streak_end,
    "currentBreaks": current_breaks,
    "currentBreaksStart": current_breaks_start,
    "currentBreaksEnd": current_breaks_end,
    "average": average,
    "median": median,
    "variance": variance,
}
SERIES_TO_VALUE.update({name: _deprecated(name) for name in DEPRECATED_FUNCTIONS})
