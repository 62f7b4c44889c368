"""
Offset-aware indicator series.

Every indicator truncates its input differently (EMA drops period-1 points,
RSI drops period, VWAP drops none). AlignedSeries carries the index of the
input point that produced its first value, so series from the same candle
history can be combined by logical index instead of by manual slicing.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from signaldesk.services.indicators.errors import IndicatorError, InvalidArgumentError


@dataclass(frozen=True, eq=False)
class AlignedSeries:
    """Read-only float series starting at logical index ``offset``."""

    values: np.ndarray
    offset: int = 0

    def __post_init__(self):
        arr = np.array(self.values, dtype=np.float64)
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)
        if self.offset < 0:
            raise InvalidArgumentError(f"offset must be >= 0, got {self.offset}")

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self.values)

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self.values, dtype=dtype)

    def __repr__(self) -> str:
        return f"AlignedSeries(offset={self.offset}, len={len(self)})"

    @property
    def end(self) -> int:
        """Logical index one past the last value."""
        return self.offset + len(self.values)

    def last(self) -> float:
        """Most recent value."""
        if len(self.values) == 0:
            raise IndicatorError("series is empty")
        return float(self.values[-1])

    def tolist(self) -> list[float]:
        return self.values.tolist()

    def aligned_with(self, other: "AlignedSeries") -> tuple[np.ndarray, np.ndarray, int]:
        """
        Slice both series to their common logical range.

        Returns:
            (self_values, other_values, start_offset)
        """
        start = max(self.offset, other.offset)
        stop = min(self.end, other.end)
        if stop <= start:
            raise InvalidArgumentError(
                f"series do not overlap: [{self.offset}, {self.end}) "
                f"and [{other.offset}, {other.end})"
            )
        return (
            self.values[start - self.offset : stop - self.offset],
            other.values[start - other.offset : stop - other.offset],
            start,
        )

    def __sub__(self, other: "AlignedSeries") -> "AlignedSeries":
        if not isinstance(other, AlignedSeries):
            return NotImplemented
        left, right, start = self.aligned_with(other)
        return AlignedSeries(left - right, start)
