from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Iterator, Sequence


class ValueKind(str, Enum):
    NUMBER = "number"
    TIME = "time"
    DATE = "date"


@dataclass(frozen=True)
class DataPoint:
    date: date
    value: float | None

    @property
    def is_present(self) -> bool:
        return self.value is not None


class Series:
    """A named sequence of per-day values on a shared date axis.

    Absent days hold ``None``. Cached statistics (bounds, extrema and the
    non-null count) are kept valid by every mutator; derived series are
    produced through ``clone`` / ``with_values`` so inputs are never modified.
    """

    def __init__(
        self,
        dates: Sequence[date],
        values: Sequence[float | None] | None = None,
        *,
        series_id: int = -1,
        name: str = "untitled",
        value_kind: ValueKind = ValueKind.NUMBER,
        used_as_x: bool = False,
        target_count: int = 0,
    ) -> None:
        self._dates: tuple[date, ...] = dates if isinstance(dates, tuple) else tuple(dates)
        if values is None:
            self._values: list[float | None] = [None] * len(self._dates)
        else:
            self._values = [None if value is None else float(value) for value in values]
        if len(self._values) != len(self._dates):
            raise ValueError(
                f"Series '{name}' has {len(self._values)} value(s) for {len(self._dates)} date(s)"
            )

        self.id = series_id
        self.name = name
        self.value_kind = value_kind
        self.used_as_x = used_as_x
        self._target_count = target_count
        self._is_clone = False

        self._y_min: float | None = None
        self._y_max: float | None = None
        self._start_date: date | None = None
        self._end_date: date | None = None
        self._non_null_count = 0
        self.recalculate_extent()

    def __repr__(self) -> str:
        return (
            f"Series(id={self.id!r}, name={self.name!r}, days={len(self._values)}, "
            f"non_null={self._non_null_count})"
        )

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[DataPoint]:
        for day, value in zip(self._dates, self._values):
            yield DataPoint(day, value)

    @property
    def dates(self) -> tuple[date, ...]:
        return self._dates

    @property
    def values(self) -> tuple[float | None, ...]:
        return tuple(self._values)

    @property
    def points(self) -> tuple[DataPoint, ...]:
        return tuple(self)

    @property
    def y_min(self) -> float | None:
        return self._y_min

    @property
    def y_max(self) -> float | None:
        return self._y_max

    @property
    def start_date(self) -> date | None:
        return self._start_date

    @property
    def end_date(self) -> date | None:
        return self._end_date

    @property
    def non_null_count(self) -> int:
        return self._non_null_count

    @property
    def target_count(self) -> int:
        return self._target_count

    @property
    def is_clone(self) -> bool:
        return self._is_clone

    def present_values(self) -> list[float]:
        return [value for value in self._values if value is not None]

    def shares_axis_with(self, other: Series) -> bool:
        return self._dates is other._dates or self._dates == other._dates

    def recalculate_extent(self) -> None:
        y_min: float | None = None
        y_max: float | None = None
        start: date | None = None
        end: date | None = None
        count = 0
        for day, value in zip(self._dates, self._values):
            if value is None:
                continue
            count += 1
            if y_min is None or value < y_min:
                y_min = value
            if y_max is None or value > y_max:
                y_max = value
            if start is None:
                start = day
            end = day
        self._y_min = y_min
        self._y_max = y_max
        self._start_date = start
        self._end_date = end
        self._non_null_count = count

    def clone(self) -> Series:
        return self.with_values(self._values)

    def with_values(self, values: Sequence[float | None]) -> Series:
        derived = Series(
            self._dates,
            values,
            name="tmp",
            value_kind=self.value_kind,
            target_count=self._target_count,
        )
        derived._is_clone = True
        return derived

    # Collection-side mutators. Each one leaves the cached statistics valid.

    def _index_of(self, day: date) -> int:
        try:
            return self._dates.index(day)
        except ValueError:
            return -1

    def get_value(self, day: date, day_shift: int = 0) -> float | None:
        index = self._index_of(day)
        if index < 0:
            return None
        index += int(day_shift)
        if 0 <= index < len(self._values):
            return self._values[index]
        return None

    def set_value(self, day: date, value: float) -> bool:
        index = self._index_of(day)
        if index < 0:
            return False
        had_value = self._values[index] is not None
        value = float(value)
        self._values[index] = value
        if had_value:
            self.recalculate_extent()
            return True

        self._non_null_count += 1
        if self._y_min is None or value < self._y_min:
            self._y_min = value
        if self._y_max is None or value > self._y_max:
            self._y_max = value
        if self._start_date is None or day < self._start_date:
            self._start_date = day
        if self._end_date is None or day > self._end_date:
            self._end_date = day
        return True

    def increment_target_count(self, count: int = 1) -> None:
        self._target_count += count

    def shift_values(self, amount: float, threshold: float | None = None) -> bool:
        shifted = False
        for index, value in enumerate(self._values):
            if value is None:
                continue
            if threshold is None or value >= threshold:
                self._values[index] = value + amount
                shifted = True
        if shifted:
            self.recalculate_extent()
        return shifted

    def fill_missing(self, value: float) -> None:
        self._values = [value if current is None else current for current in self._values]
        self.recalculate_extent()

    def accumulate(self) -> None:
        total = 0.0
        for index, value in enumerate(self._values):
            if value is not None:
                total += value
            self._values[index] = total
        self.recalculate_extent()


class SeriesRegistry:
    """Series collected for one render pass, all sharing one date axis."""

    def __init__(self, dates: Iterable[date]) -> None:
        self._dates: tuple[date, ...] = tuple(dates)
        self._series: list[Series] = []

    @classmethod
    def for_range(cls, start: date, end: date) -> SeriesRegistry:
        if end < start:
            raise ValueError(f"End date {end.isoformat()} is before start date {start.isoformat()}")
        days = (end - start).days
        return cls(start + timedelta(days=offset) for offset in range(days + 1))

    def __iter__(self) -> Iterator[Series]:
        return iter(list(self._series))

    def __len__(self) -> int:
        return len(self._series)

    @property
    def dates(self) -> tuple[date, ...]:
        return self._dates

    @property
    def names(self) -> list[str]:
        return [series.name for series in self._series]

    def index_of(self, day: date) -> int:
        try:
            return self._dates.index(day)
        except ValueError:
            return -1

    def create_series(
        self,
        series_id: int,
        name: str | None = None,
        *,
        value_kind: ValueKind = ValueKind.NUMBER,
        used_as_x: bool = False,
    ) -> Series:
        series = Series(
            self._dates,
            series_id=series_id,
            name=name if name is not None else f"dataset{series_id}",
            value_kind=value_kind,
            used_as_x=used_as_x,
        )
        self._series.append(series)
        return series

    def add(self, series: Series) -> Series:
        if series.dates != self._dates:
            raise ValueError(f"Series '{series.name}' does not use the registry date axis")
        # Re-point at the registry tuple so axis checks can short-circuit on identity.
        series._dates = self._dates
        self._series.append(series)
        return series

    def get(self, series_id: int) -> Series | None:
        for series in self._series:
            if series.id == series_id:
                return series
        return None

    def default_series(self) -> Series | None:
        for series in self._series:
            if not series.used_as_x:
                return series
        return None

    def x_series_ids(self) -> list[int]:
        ids: list[int] = []
        for series in self._series:
            if series.used_as_x and series.id != -1 and series.id not in ids:
                ids.append(series.id)
        return ids
