from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stackchart.config import DEFAULT_CONFIG, ChartConfig
from stackchart.formatting import NumberFormatter, format_grouped_integer
from stackchart.legend import LegendCell, pack_legend
from stackchart.model import Bar, ColorToken, LegendItem, Rect
from stackchart.scales import AxisScale


@dataclass(frozen=True)
class ChartRegions:
    y_axis: Rect
    content: Rect
    x_axis: Rect
    legend: Rect


@dataclass(frozen=True)
class YTick:
    value: int
    text: str
    center_y: float
    label_rect: Rect


@dataclass(frozen=True)
class YAxisGeometry:
    rect: Rect
    ticks: tuple[YTick, ...] = ()
    # Horizontal gridline ys, local to the content region; each spans `gridline_width`.
    gridlines: tuple[float, ...] = ()
    gridline_width: float = 0.0


@dataclass(frozen=True)
class XLabel:
    text: str
    rect: Rect


@dataclass(frozen=True)
class XAxisGeometry:
    rect: Rect
    labels: tuple[XLabel, ...] = ()
    # Vertical gridline xs, local to the content region; each spans `gridline_height`.
    gridlines: tuple[float, ...] = ()
    gridline_height: float = 0.0


@dataclass(frozen=True)
class Segment:
    color: ColorToken
    title: str
    value: float
    rect: Rect


@dataclass(frozen=True)
class BarColumn:
    title: str
    x: float
    width: float
    segments: tuple[Segment, ...] = ()

    @property
    def stack_height(self) -> float:
        return float(sum(segment.rect.height for segment in self.segments))


@dataclass(frozen=True)
class ContentGeometry:
    rect: Rect
    bars: tuple[BarColumn, ...] = ()

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(segment for bar in self.bars for segment in bar.segments)


@dataclass(frozen=True)
class LegendGeometry:
    rect: Rect
    cells: tuple[LegendCell, ...] = ()


def compute_regions(
    width: float,
    height: float,
    legend_height: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> ChartRegions:
    plot_h = height - legend_height - config.axis_x_height
    plot_w = width - config.axis_y_width
    margin = config.legend_side_margin
    return ChartRegions(
        y_axis=Rect(x=0.0, y=0.0, width=config.axis_y_width, height=plot_h),
        content=Rect(x=config.axis_y_width, y=0.0, width=plot_w, height=plot_h),
        x_axis=Rect(x=config.axis_y_width, y=plot_h, width=plot_w, height=config.axis_x_height),
        legend=Rect(x=margin, y=height - legend_height, width=width - margin, height=legend_height),
    )


def layout_y_axis(
    scale: AxisScale | None,
    region: Rect,
    content_width: float,
    *,
    formatter: NumberFormatter = format_grouped_integer,
    lines_hidden: bool = False,
) -> YAxisGeometry:
    if scale is None:
        return YAxisGeometry(rect=region)

    content_h = region.height
    item_h = content_h / scale.step_count
    step_value = scale.step_value
    ticks: list[YTick] = []
    gridlines: list[float] = []
    for i in range(scale.step_count + 1):
        value = i * step_value
        center_y = content_h - item_h / 2 - i * item_h
        ticks.append(
            YTick(
                value=value,
                text=formatter(value),
                center_y=center_y,
                label_rect=Rect(x=0.0, y=center_y, width=region.width, height=item_h),
            )
        )
        if not lines_hidden:
            gridlines.append(content_h - i * item_h)
    return YAxisGeometry(
        rect=region,
        ticks=tuple(ticks),
        gridlines=tuple(gridlines),
        gridline_width=0.0 if lines_hidden else content_width,
    )


def layout_x_axis(
    bars: Sequence[Bar],
    region: Rect,
    content_height: float,
    *,
    lines_hidden: bool = False,
) -> XAxisGeometry:
    if not bars:
        return XAxisGeometry(rect=region)

    item_w = region.width / len(bars)
    labels: list[XLabel] = []
    gridlines: list[float] = []
    for i, bar in enumerate(bars):
        labels.append(XLabel(text=bar.title, rect=Rect(x=i * item_w, y=0.0, width=item_w, height=region.height)))
        if not lines_hidden:
            gridlines.append(i * item_w + item_w / 2)
    return XAxisGeometry(
        rect=region,
        labels=tuple(labels),
        gridlines=tuple(gridlines),
        gridline_height=0.0 if lines_hidden else content_height,
    )


def layout_content(bars: Sequence[Bar], scale: AxisScale | None, region: Rect) -> ContentGeometry:
    """Stack each bar's parts bottom-up in a half-width column.

    Heights are proportional to the rounded axis maximum so the bars line up
    with the Y-axis gridlines.
    """
    if scale is None or not bars:
        return ContentGeometry(rect=region)

    max_h = region.height
    item_w = region.width / len(bars)
    columns: list[BarColumn] = []
    for i, bar in enumerate(bars):
        bar_x = i * item_w + item_w / 4
        bar_w = item_w / 2
        stacked = 0.0
        segments: list[Segment] = []
        for part in bar.parts:
            part_h = part_height(part.value, scale.maximum, max_h)
            stacked += part_h
            segments.append(
                Segment(
                    color=part.color,
                    title=part.title,
                    value=part.value,
                    rect=Rect(x=bar_x, y=max_h - stacked, width=bar_w, height=part_h),
                )
            )
        columns.append(BarColumn(title=bar.title, x=bar_x, width=bar_w, segments=tuple(segments)))
    return ContentGeometry(rect=region, bars=tuple(columns))


def part_height(value: float, maximum: int, max_height: float) -> float:
    return (value / maximum) * max_height


def layout_legend(
    items: Sequence[LegendItem],
    region: Rect,
    config: ChartConfig = DEFAULT_CONFIG,
) -> LegendGeometry:
    return LegendGeometry(rect=region, cells=pack_legend(items, region.width, config))
