import unittest
from datetime import date, timedelta

from trackerexpr import analytics
from trackerexpr.context import EvalContext
from trackerexpr.errors import ErrorKind, ExprError
from trackerexpr.series import Series


def _series(values: list) -> Series:
    start = date(2024, 3, 1)
    days = tuple(start + timedelta(days=offset) for offset in range(len(values)))
    return Series(days, values, target_count=sum(1 for value in values if value is not None))


CONTEXT = EvalContext(start_date=date(2024, 1, 1), end_date=date(2024, 12, 31))


def _call(name: str, series: Series, context: EvalContext = CONTEXT):
    return analytics.SERIES_TO_VALUE[name](series, context)


class TestExtremaAndStatistics(unittest.TestCase):
    def test_min_max_and_their_latest_dates(self) -> None:
        series = _series([3, 1, None, 5, 1, 5, None])
        self.assertEqual(_call("min", series), 1.0)
        self.assertEqual(_call("max", series), 5.0)
        self.assertEqual(_call("minDate", series), series.dates[4])
        self.assertEqual(_call("maxDate", series), series.dates[5])

    def test_extrema_of_empty_series(self) -> None:
        series = _series([None, None])
        for name in ("min", "max", "minDate", "maxDate", "median"):
            result = _call(name, series)
            self.assertIsInstance(result, ExprError, name)
            self.assertEqual(result.kind, ErrorKind.NO_DATA)
        self.assertEqual(_call("minDate", series).message, "Min date not found")

    def test_sum_average_median_variance(self) -> None:
        series = _series([2, None, 4, 4, None, 4, 5, 7, 9])
        self.assertEqual(_call("sum", series), 35.0)
        self.assertEqual(_call("average", series), 5.0)
        self.assertEqual(_call("median", series), 4.0)
        self.assertAlmostEqual(_call("variance", series), 32 / 6)

    def test_average_of_empty_series_divides_by_zero(self) -> None:
        result = _call("average", _series([None, None]))
        self.assertEqual(result.kind, ErrorKind.DIVIDE_BY_ZERO)
        self.assertEqual(_call("sum", _series([None])), 0.0)

    def test_variance_needs_two_values(self) -> None:
        result = _call("variance", _series([None, 3]))
        self.assertEqual(result.kind, ErrorKind.NO_DATA)

    def test_counts(self) -> None:
        series = _series([1, None, 0, None])
        self.assertEqual(_call("numDays", series), 4.0)
        self.assertEqual(_call("numDaysHavingData", series), 2.0)
        self.assertEqual(_call("numTargets", series), 2.0)

    def test_start_and_end_date(self) -> None:
        series = _series([None, 1, 2, None])
        self.assertEqual(_call("startDate", series), series.dates[1])
        self.assertEqual(_call("endDate", series), series.dates[2])

    def test_start_and_end_date_fall_back_to_context(self) -> None:
        series = _series([None, None])
        self.assertEqual(_call("startDate", series), date(2024, 1, 1))
        self.assertEqual(_call("endDate", series), date(2024, 12, 31))
        self.assertEqual(_call("startDate", series, EvalContext()).kind, ErrorKind.NO_DATA)

    def test_deprecated_functions(self) -> None:
        series = _series([1])
        for name in ("count", "days", "lastStreak"):
            result = _call(name, series)
            self.assertEqual(result.kind, ErrorKind.DEPRECATED_FUNCTION)
            self.assertIn(name, result.message)


class TestStreaksAndBreaks(unittest.TestCase):
    def test_streak_scenario(self) -> None:
        series = _series([1, 1, None, 1, 1, 1, None])
        self.assertEqual(_call("maxStreak", series), 3.0)
        self.assertEqual(_call("maxStreakStart", series), series.dates[3])
        self.assertEqual(_call("maxStreakEnd", series), series.dates[5])
        self.assertEqual(_call("currentStreak", series), 0.0)
        self.assertEqual(_call("currentBreaks", series), 1.0)
        self.assertEqual(_call("currentBreaksStart", series), series.dates[6])
        self.assertEqual(_call("currentBreaksEnd", series), series.dates[6])
        self.assertEqual(_call("maxBreaks", series), 1.0)

    def test_zero_counts_as_collected_value(self) -> None:
        series = _series([0, 0, None])
        self.assertEqual(_call("maxStreak", series), 2.0)

    def test_equal_streaks_prefer_the_later_run(self) -> None:
        series = _series([1, None, 1])
        self.assertEqual(_call("maxStreak", series), 1.0)
        self.assertEqual(_call("maxStreakStart", series), series.dates[2])
        self.assertEqual(_call("maxStreakEnd", series), series.dates[2])

    def test_equal_breaks_prefer_the_earlier_run(self) -> None:
        series = _series([None, 1, None])
        self.assertEqual(_call("maxBreaks", series), 1.0)
        self.assertEqual(_call("maxBreaksStart", series), series.dates[0])
        self.assertEqual(_call("maxBreaksEnd", series), series.dates[0])

    def test_longest_break_bounds(self) -> None:
        series = _series([1, None, None, None, 1, None, None])
        self.assertEqual(_call("maxBreaks", series), 3.0)
        self.assertEqual(_call("maxBreaksStart", series), series.dates[1])
        self.assertEqual(_call("maxBreaksEnd", series), series.dates[3])

    def test_current_streak_bounds(self) -> None:
        series = _series([1, None, 2, 3, 4])
        self.assertEqual(_call("currentStreak", series), 3.0)
        self.assertEqual(_call("currentStreakStart", series), series.dates[2])
        self.assertEqual(_call("currentStreakEnd", series), series.dates[4])
        self.assertEqual(_call("currentBreaks", series), 0.0)

    def test_missing_runs_report_errors(self) -> None:
        all_present = _series([1, 2])
        all_absent = _series([None, None])
        for name in ("currentBreaksStart", "currentBreaksEnd", "maxBreaksStart", "maxBreaksEnd"):
            result = _call(name, all_present)
            self.assertEqual(result.kind, ErrorKind.NO_STREAK_OR_BREAK, name)
        for name in ("currentStreakStart", "currentStreakEnd", "maxStreakStart", "maxStreakEnd"):
            result = _call(name, all_absent)
            self.assertEqual(result.kind, ErrorKind.NO_STREAK_OR_BREAK, name)
        self.assertIn("no start found", _call("currentStreakStart", all_absent).message)
        self.assertEqual(_call("maxStreak", all_absent), 0.0)
        self.assertEqual(_call("currentBreaks", all_absent), 2.0)


if __name__ == "__main__":
    unittest.main()
