from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from stackchart.errors import ChartConfigError


@dataclass(frozen=True)
class ChartConfig:
    """Layout knobs for a stacked-bar chart, in points."""

    axis_y_width: float = 80.0
    axis_x_height: float = 40.0
    axis_y_lines_hidden: bool = False
    axis_x_lines_hidden: bool = False
    legend_columns: int = 3
    legend_row_height: float = 24.0
    legend_top_padding: float = 20.0
    legend_side_margin: float = 40.0
    legend_swatch_inset: float = 4.0
    legend_title_max_lines: int = 2


DEFAULT_CONFIG = ChartConfig()

_NON_NEGATIVE_SIZES = (
    "axis_y_width",
    "axis_x_height",
    "legend_top_padding",
    "legend_side_margin",
    "legend_swatch_inset",
)
_FLAGS = ("axis_y_lines_hidden", "axis_x_lines_hidden")
_POSITIVE_COUNTS = ("legend_columns", "legend_title_max_lines")


def validate_chart_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: ChartConfig = DEFAULT_CONFIG,
) -> ChartConfig:
    """Validate and merge overrides onto ``base`` (the defaults unless given)."""

    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ChartConfigError(f"Unknown chart config key: {key}")
            raw[key] = value

    for key in _NON_NEGATIVE_SIZES:
        if not _is_number(raw[key]) or float(raw[key]) < 0:
            raise ChartConfigError(f"Config `{key}` must be a number >= 0")

    if not _is_number(raw["legend_row_height"]) or float(raw["legend_row_height"]) <= 0:
        raise ChartConfigError("Config `legend_row_height` must be a positive number")
    if float(raw["legend_swatch_inset"]) * 2 > float(raw["legend_row_height"]):
        raise ChartConfigError("Config `legend_swatch_inset` must fit twice within `legend_row_height`")

    for key in _FLAGS:
        if not isinstance(raw[key], bool):
            raise ChartConfigError(f"Config `{key}` must be a bool")

    for key in _POSITIVE_COUNTS:
        if not isinstance(raw[key], int) or isinstance(raw[key], bool) or raw[key] <= 0:
            raise ChartConfigError(f"Config `{key}` must be a positive integer")

    return replace(
        base,
        axis_y_width=float(raw["axis_y_width"]),
        axis_x_height=float(raw["axis_x_height"]),
        axis_y_lines_hidden=raw["axis_y_lines_hidden"],
        axis_x_lines_hidden=raw["axis_x_lines_hidden"],
        legend_columns=raw["legend_columns"],
        legend_row_height=float(raw["legend_row_height"]),
        legend_top_padding=float(raw["legend_top_padding"]),
        legend_side_margin=float(raw["legend_side_margin"]),
        legend_swatch_inset=float(raw["legend_swatch_inset"]),
        legend_title_max_lines=raw["legend_title_max_lines"],
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
