"""Moving-average filter used to smooth frame timings."""

from __future__ import annotations

from collections import deque

DEFAULT_SIZE = 50


class LowPassFilter:
    """Average of the last ``size`` values, with unfilled slots counted as zero."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size <= 0:
            raise ValueError("filter size must be positive")
        self.size = size
        self._values: deque[float] = deque([0.0] * size, maxlen=size)

    def add_value(self, value: float) -> None:
        """Record a value, replacing the oldest one."""
        self._values.append(float(value))

    def average(self) -> float:
        """Mean over all slots of the filter."""
        return sum(self._values) / self.size