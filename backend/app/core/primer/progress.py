# File: backend/app/core/primer/progress.py
# Version: v0.1.0
"""
Coarse progress reporting for long primer searches.

The search tells a `ProgressTicker` how much work it did; the ticker calls the
observer only when the value crosses one of `ticks` equally spaced thresholds,
so observers see at most ~`ticks` updates regardless of problem size.

A callback may raise `SearchCancelled` to abort the search cooperatively.
"""

from __future__ import annotations

from typing import Callable, Optional

ProgressCallback = Callable[[float], None]


class SearchCancelled(Exception):
    """Raised by a progress observer to stop a running search."""


class ProgressTicker:
    def __init__(self, callback: Optional[ProgressCallback] = None, ticks: int = 100) -> None:
        if ticks < 2:
            raise ValueError(f"ticks must be >= 2 (got {ticks})")
        self._callback = callback
        self._ticks = ticks
        self._end_value = 100.0
        self._value = 0.0
        self._last_tick = -1
        self._units_per_tick = self._end_value / self._ticks

    @property
    def value(self) -> float:
        return self._value

    @property
    def end_value(self) -> float:
        return self._end_value

    def progress(self) -> float:
        return self._value / self._end_value

    def set_end_value(self, end_value: float) -> None:
        if end_value <= 0:
            raise ValueError("end value must be greater than zero")
        self._end_value = float(end_value)
        self._units_per_tick = self._end_value / self._ticks

    def set_value_and_end_value(self, value: float, end_value: float) -> None:
        self.set_end_value(end_value)
        self.set_value(value)

    def set_value(self, value: float) -> None:
        self._value = min(max(0.0, float(value)), self._end_value)
        if self._value >= self._end_value:
            tick = self._ticks
        else:
            tick = min(int(self._value / self._units_per_tick), self._ticks - 1)
        if tick != self._last_tick:
            self._last_tick = tick
            if self._callback is not None:
                self._callback(self.progress())

    def update(self, delta: float) -> None:
        self.set_value(self._value + delta)

    def reset(self) -> None:
        self.set_value(0.0)

    def end(self) -> None:
        self.set_value(self._end_value)
