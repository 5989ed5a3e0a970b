"""Append-only numeric series.

Every stage of the engine publishes its per-bar output into a ``Series``.
Historical bars are immutable once written; the only mutation is appending
the newest bar.  Lookbacks that reach before the first bar read as ``0.0``,
which is the warm-up convention used by all recursive filters.
"""

from __future__ import annotations

from typing import Iterable, Iterator, overload

import numpy as np


class Series:
    """Ordered, 0-indexed, append-only sequence of floats."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float] | None = None):
        self._values: list[float] = []
        if values is not None:
            self.extend(values)

    def append(self, value: float) -> None:
        self._values.append(float(value))

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self._values.append(float(value))

    def __len__(self) -> int:
        return len(self._values)

    @overload
    def __getitem__(self, index: int) -> float: ...

    @overload
    def __getitem__(self, index: slice) -> list[float]: ...

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Series):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"Series(len={len(self._values)})"

    # ------------------------------------------------------------------
    # Lookback helpers
    # ------------------------------------------------------------------

    @property
    def last(self) -> float:
        """Newest value, or 0.0 for an empty series."""
        return self._values[-1] if self._values else 0.0

    def ago(self, lag: int) -> float:
        """Value ``lag`` bars before the newest bar (0 = newest).

        Bars that do not exist yet read as 0.0.
        """
        if lag < 0:
            raise ValueError(f"lag must be >= 0, got {lag}")
        idx = len(self._values) - 1 - lag
        return self._values[idx] if idx >= 0 else 0.0

    def tail(self, n: int) -> np.ndarray:
        """Last ``n`` values, oldest first, left-padded with zeros."""
        if n <= 0:
            return np.zeros(0, dtype=np.float64)
        out = np.zeros(n, dtype=np.float64)
        available = self._values[-n:]
        if available:
            out[n - len(available):] = available
        return out

    def to_numpy(self) -> np.ndarray:
        return np.asarray(self._values, dtype=np.float64)

    def rounded(self, digits: int = 4) -> list[float]:
        """Display copy rounded to ``digits``; stored values are untouched."""
        return [round(v, digits) for v in self._values]
