from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stackchart.config import DEFAULT_CONFIG, ChartConfig
from stackchart.model import Bar, ColorToken, LegendItem, Rect


@dataclass(frozen=True)
class LegendCell:
    item: LegendItem
    row: int
    column: int
    rect: Rect
    swatch_rect: Rect
    title_rect: Rect
    title_max_lines: int

    @property
    def color(self) -> ColorToken:
        return self.item.color

    @property
    def title(self) -> str:
        return self.item.title


def aggregate_legend(bars: Sequence[Bar]) -> tuple[LegendItem, ...]:
    """Unique-by-title legend items in first-encounter order.

    Parts are scanned bar by bar, then in stacking order; the first part seen
    for a title decides its color.
    """
    seen: set[str] = set()
    items: list[LegendItem] = []
    for bar in bars:
        for part in bar.parts:
            if part.title in seen:
                continue
            seen.add(part.title)
            items.append(LegendItem(color=part.color, title=part.title))
    return tuple(items)


def legend_rows(item_count: int, columns: int) -> int:
    if item_count <= 0:
        return 0
    return (item_count - 1) // columns + 1


def legend_height(item_count: int, config: ChartConfig = DEFAULT_CONFIG) -> float:
    if item_count <= 0:
        return 0.0
    return config.legend_top_padding + legend_rows(item_count, config.legend_columns) * config.legend_row_height


def pack_legend(
    items: Sequence[LegendItem],
    region_width: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> tuple[LegendCell, ...]:
    columns = config.legend_columns
    row_h = config.legend_row_height
    inset = config.legend_swatch_inset
    cell_w = region_width / columns
    swatch = Rect(x=inset, y=inset, width=row_h - 2 * inset, height=row_h - 2 * inset)
    title = Rect(x=row_h + inset, y=0.0, width=cell_w - (row_h + 2 * inset), height=row_h)

    cells: list[LegendCell] = []
    for i, item in enumerate(items):
        column = i % columns
        row = i // columns
        cells.append(
            LegendCell(
                item=item,
                row=row,
                column=column,
                rect=Rect(
                    x=column * cell_w,
                    y=config.legend_top_padding + row * row_h,
                    width=cell_w,
                    height=row_h,
                ),
                swatch_rect=swatch,
                title_rect=title,
                title_max_lines=config.legend_title_max_lines,
            )
        )
    return tuple(cells)
