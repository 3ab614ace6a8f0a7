from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from stackchart.model import Bar


EMPTY_AXIS_MAXIMUM = 10
DEFAULT_STEP_COUNT = 10
NICE_STEPS = (1, 2, 5)
NICE_SCALE_ITERATIONS = 6


@dataclass(frozen=True)
class AxisScale:
    bars_max_value: int
    maximum: int
    step_count: int

    @property
    def step_value(self) -> int:
        return self.maximum // self.step_count


def bars_total(bar: Bar) -> float:
    return float(sum(part.value for part in bar.parts))


def bars_max_value(bars: Sequence[Bar]) -> int | None:
    if not bars:
        return None
    return int(math.ceil(max(bars_total(bar) for bar in bars)))


def axis_maximum(bars_max: int) -> int:
    """Round ``bars_max`` up to a multiple of a 1/2/5 x 10^k unit.

    The unit is the smallest one whose ten-fold still exceeds ``bars_max``,
    scanning scales outer and steps inner. Values beyond the last threshold
    are returned unchanged.
    """
    if bars_max == 0:
        return EMPTY_AXIS_MAXIMUM
    scale = 1
    for _ in range(NICE_SCALE_ITERATIONS):
        for step in NICE_STEPS:
            rounding = step * scale
            if bars_max < rounding * 10:
                return -(-bars_max // rounding) * rounding
        scale *= 10
    return bars_max


def axis_step_count(maximum: int) -> int:
    for count in range(10, 1, -1):
        if maximum % count == 0:
            return count
    return DEFAULT_STEP_COUNT


def compute_axis_scale(bars: Sequence[Bar]) -> AxisScale | None:
    bars_max = bars_max_value(bars)
    if bars_max is None:
        return None
    maximum = axis_maximum(bars_max)
    return AxisScale(bars_max_value=bars_max, maximum=maximum, step_count=axis_step_count(maximum))
