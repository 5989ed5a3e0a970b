"""Hot path state models using dataclass(slots=True).

These hold the per-instance memory of the recursive stages and the small
per-bar records passed between them.  They are plain floats on purpose:
each ``update`` touches a handful of values and allocation must stay cheap.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass(slots=True)
class FilterState:
    """Recursive memory of one filter instance.

    ``inputs`` and ``outputs`` are newest-first and pre-filled with zeros,
    so any lookback before the first bar reads as 0.0.
    """

    order: int
    input_depth: int
    inputs: deque[float] = field(init=False)
    outputs: deque[float] = field(init=False)
    count: int = 0  # bars seen

    def __post_init__(self) -> None:
        self.inputs = deque([0.0] * self.input_depth, maxlen=self.input_depth)
        self.outputs = deque([0.0] * self.order, maxlen=self.order)

    def prev_input(self, lag: int) -> float:
        """Input ``lag`` bars before the current one (1 = previous bar)."""
        return self.inputs[lag - 1]

    def prev_output(self, lag: int) -> float:
        """Output ``lag`` bars before the current one (1 = previous bar)."""
        return self.outputs[lag - 1]

    def push(self, value: float, output: float) -> None:
        if self.input_depth:
            self.inputs.appendleft(value)
        self.outputs.appendleft(output)
        self.count += 1

    def clear(self) -> None:
        self.inputs.extend([0.0] * self.input_depth)
        self.outputs.extend([0.0] * self.order)
        self.count = 0


@dataclass(slots=True)
class QuadraturePair:
    """In-phase and quadrature components of the analytic signal for one bar."""

    in_phase: float = 0.0
    quadrature: float = 0.0

    @property
    def magnitude_sq(self) -> float:
        return self.in_phase * self.in_phase + self.quadrature * self.quadrature


@dataclass(slots=True)
class CycleReading:
    """Everything the pipeline produced for a single bar."""

    index: int
    filtered: float
    period: float
    dominant_cycle: float
    in_phase: float | None = None
    quadrature: float | None = None
    window: int | None = None
    value: float | None = None
