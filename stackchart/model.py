from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Hashable, Sequence

from stackchart.errors import ChartDataError


ColorToken = Hashable


def _coerce_value(raw: Any) -> float:
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ChartDataError(f"bar part value must be numeric, got {raw!r}") from exc
    # NaN is how numpy/pandas spell a missing value.
    if math.isnan(value):
        return 0.0
    return value


@dataclass(frozen=True)
class BarPart:
    value: float | None
    color: ColorToken
    title: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _coerce_value(self.value))
        object.__setattr__(self, "title", str(self.title))


@dataclass(frozen=True)
class Bar:
    title: str
    parts: tuple[BarPart, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", str(self.title))
        parts = tuple(self.parts)
        for part in parts:
            if not isinstance(part, BarPart):
                raise ChartDataError(f"bar `{self.title}` parts must be BarPart instances, got {type(part)!r}")
        object.__setattr__(self, "parts", parts)

    @classmethod
    def single(cls, title: str, part: BarPart) -> "Bar":
        return cls(title=title, parts=(part,))


@dataclass(frozen=True)
class LegendItem:
    color: ColorToken
    title: str


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def as_bars(bars: Sequence[Bar]) -> tuple[Bar, ...]:
    out = tuple(bars)
    for bar in out:
        if not isinstance(bar, Bar):
            raise ChartDataError(f"expected Bar instances, got {type(bar)!r}")
    return out
