from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from stackchart.geometry import ContentGeometry
from stackchart.layout import ChartGeometry
from stackchart.raster.canvas import RGBA, coerce_color, draw_hline, draw_vline, fill_rect, new_canvas
from stackchart.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text_in_rect, wrap_text


@dataclass(frozen=True)
class RasterStyle:
    background: RGBA = (255, 255, 255, 255)
    grid_color: RGBA = (239, 239, 244, 255)
    text_color: RGBA = (0, 0, 0, 255)
    font_family: str = DEFAULT_FONT_FAMILY
    axis_font_px: float = 14.0
    legend_font_px: float = 14.0
    legend_embolden_px: int = 2


def render_chart(
    geometry: ChartGeometry,
    *,
    style: RasterStyle = RasterStyle(),
    content: ContentGeometry | None = None,
) -> np.ndarray:
    """Rasterize one layout pass into an (H, W, 4) uint8 RGBA frame.

    `content` replaces the target bar geometry, e.g. with an animation frame.
    """
    width = max(1, int(round(geometry.bounds.width)))
    height = max(1, int(round(geometry.bounds.height)))
    canvas = new_canvas(width, height, style.background)

    _draw_gridlines(canvas, geometry, style)
    _draw_content(canvas, content if content is not None else geometry.content)
    _draw_y_axis(canvas, geometry, style)
    _draw_x_axis(canvas, geometry, style)
    _draw_legend(canvas, geometry, style)
    return canvas


def _draw_gridlines(canvas: np.ndarray, geometry: ChartGeometry, style: RasterStyle) -> None:
    origin = geometry.content.rect
    for y in geometry.y_axis.gridlines:
        draw_hline(canvas, origin.x, origin.x + geometry.y_axis.gridline_width - 1, origin.y + y, style.grid_color)
    for x in geometry.x_axis.gridlines:
        draw_vline(canvas, origin.x + x, origin.y, origin.y + geometry.x_axis.gridline_height - 1, style.grid_color)


def _draw_content(canvas: np.ndarray, content: ContentGeometry) -> None:
    origin = content.rect
    for bar in content.bars:
        for segment in bar.segments:
            fill_rect(canvas, segment.rect.offset(origin.x, origin.y), coerce_color(segment.color))


def _draw_y_axis(canvas: np.ndarray, geometry: ChartGeometry, style: RasterStyle) -> None:
    origin = geometry.y_axis.rect
    for tick in geometry.y_axis.ticks:
        draw_text_in_rect(
            canvas,
            tick.label_rect.offset(origin.x, origin.y),
            [tick.text],
            style.text_color,
            align="right",
            font_family=style.font_family,
            font_size_px=style.axis_font_px,
        )


def _draw_x_axis(canvas: np.ndarray, geometry: ChartGeometry, style: RasterStyle) -> None:
    origin = geometry.x_axis.rect
    for label in geometry.x_axis.labels:
        draw_text_in_rect(
            canvas,
            label.rect.offset(origin.x, origin.y),
            [label.text],
            style.text_color,
            align="center",
            font_family=style.font_family,
            font_size_px=style.axis_font_px,
        )


def _draw_legend(canvas: np.ndarray, geometry: ChartGeometry, style: RasterStyle) -> None:
    origin = geometry.legend.rect
    for cell in geometry.legend.cells:
        cell_rect = cell.rect.offset(origin.x, origin.y)
        color = coerce_color(cell.color)
        fill_rect(canvas, cell.swatch_rect.offset(cell_rect.x, cell_rect.y), color)
        title_rect = cell.title_rect.offset(cell_rect.x, cell_rect.y)
        lines = wrap_text(
            cell.title,
            title_rect.width,
            max_lines=cell.title_max_lines,
            font_family=style.font_family,
            font_size_px=style.legend_font_px,
        )
        font_px = style.legend_font_px
        if len(lines) > 1:
            # Shrink wrapped titles to fit the row, down to half size.
            font_px = max(font_px * 0.5, min(font_px, title_rect.height / (1.2 * len(lines))))
        draw_text_in_rect(
            canvas,
            title_rect,
            lines,
            color,
            align="left",
            font_family=style.font_family,
            font_size_px=font_px,
            embolden_px=style.legend_embolden_px,
        )
