from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Sequence

from stackchart.config import DEFAULT_CONFIG, ChartConfig, validate_chart_config
from stackchart.errors import ChartConfigError
from stackchart.formatting import NumberFormatter, format_grouped_integer
from stackchart.geometry import (
    ContentGeometry,
    LegendGeometry,
    XAxisGeometry,
    YAxisGeometry,
    compute_regions,
    layout_content,
    layout_legend,
    layout_x_axis,
    layout_y_axis,
)
from stackchart.legend import aggregate_legend, legend_height
from stackchart.model import Bar, LegendItem, Rect, as_bars
from stackchart.scales import AxisScale, compute_axis_scale

LOGGER = logging.getLogger(__name__)

LayoutListener = Callable[["ChartGeometry"], None]


@dataclass(frozen=True)
class ChartGeometry:
    """Target geometry of one layout pass, handed to the rendering collaborator."""

    bounds: Rect
    scale: AxisScale | None
    legend_items: tuple[LegendItem, ...]
    legend_height: float
    content: ContentGeometry
    legend: LegendGeometry
    y_axis: YAxisGeometry
    x_axis: XAxisGeometry

    @property
    def is_empty(self) -> bool:
        return self.scale is None


class ChartLayout:
    """Owns chart data, bounds and config; re-runs the full layout on every change.

    Passes are synchronous. A change requested by a listener while a pass is
    running is applied after that pass and triggers one follow-up pass.
    """

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        *,
        config: ChartConfig = DEFAULT_CONFIG,
        formatter: NumberFormatter = format_grouped_integer,
    ) -> None:
        self._bars: tuple[Bar, ...] = ()
        self._width = float(width)
        self._height = float(height)
        self._config = config
        self._formatter = formatter
        self._legend_items: tuple[LegendItem, ...] = ()
        self._legend_height = 0.0
        self._geometry: ChartGeometry | None = None
        self._listeners: list[LayoutListener] = []
        self._in_pass = False
        self._pending = False
        self._pass_count = 0
        self._run_pipeline()

    @property
    def bars(self) -> tuple[Bar, ...]:
        return self._bars

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def bounds(self) -> Rect:
        return Rect(x=0.0, y=0.0, width=self._width, height=self._height)

    @property
    def legend_items(self) -> tuple[LegendItem, ...]:
        return self._legend_items

    @property
    def legend_height(self) -> float:
        return self._legend_height

    @property
    def pass_count(self) -> int:
        return self._pass_count

    @property
    def geometry(self) -> ChartGeometry:
        assert self._geometry is not None
        return self._geometry

    def add_listener(self, listener: LayoutListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: LayoutListener) -> None:
        self._listeners.remove(listener)

    def set_data(self, bars: Sequence[Bar]) -> ChartGeometry:
        self._bars = as_bars(bars)
        self._legend_items = aggregate_legend(self._bars)
        return self._request_pass()

    def set_bounds(self, width: float, height: float) -> ChartGeometry:
        self._width = float(width)
        self._height = float(height)
        return self._request_pass()

    def set_config(self, config: ChartConfig | None = None, **overrides: Any) -> ChartGeometry:
        if config is not None and not isinstance(config, ChartConfig):
            raise ChartConfigError(f"config must be a ChartConfig, got {type(config)!r}")
        self._config = validate_chart_config(overrides, base=config or self._config)
        return self._request_pass()

    def set_formatter(self, formatter: NumberFormatter) -> ChartGeometry:
        self._formatter = formatter
        return self._request_pass()

    def _request_pass(self) -> ChartGeometry:
        if self._in_pass:
            LOGGER.debug("layout pass in progress; deferring follow-up pass")
            self._pending = True
            return self.geometry
        self._in_pass = True
        try:
            while True:
                self._pending = False
                self._run_pipeline()
                self._notify()
                if not self._pending:
                    break
        finally:
            self._in_pass = False
            self._pending = False
        return self.geometry

    def _run_pipeline(self) -> None:
        config = self._config
        bars = self._bars
        self._legend_height = legend_height(len(self._legend_items), config)
        regions = compute_regions(self._width, self._height, self._legend_height, config)
        scale = compute_axis_scale(bars)

        content = layout_content(bars, scale, regions.content)
        legend = layout_legend(self._legend_items, regions.legend, config)
        y_axis = layout_y_axis(
            scale,
            regions.y_axis,
            regions.content.width,
            formatter=self._formatter,
            lines_hidden=config.axis_y_lines_hidden,
        )
        x_axis = layout_x_axis(
            bars,
            regions.x_axis,
            regions.content.height,
            lines_hidden=config.axis_x_lines_hidden,
        )

        self._pass_count += 1
        self._geometry = ChartGeometry(
            bounds=self.bounds,
            scale=scale,
            legend_items=self._legend_items,
            legend_height=self._legend_height,
            content=content,
            legend=legend,
            y_axis=y_axis,
            x_axis=x_axis,
        )
        LOGGER.debug(
            "layout pass %d: bars=%d axis_max=%s steps=%s legend_h=%.1f",
            self._pass_count,
            len(bars),
            scale.maximum if scale is not None else None,
            scale.step_count if scale is not None else None,
            self._legend_height,
        )

    def _notify(self) -> None:
        geometry = self.geometry
        for listener in tuple(self._listeners):
            listener(geometry)
