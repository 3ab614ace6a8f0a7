from stackchart.config import DEFAULT_CONFIG, ChartConfig, validate_chart_config
from stackchart.errors import ChartConfigError, ChartDataError
from stackchart.formatting import format_grouped_integer
from stackchart.layout import ChartGeometry, ChartLayout
from stackchart.legend import aggregate_legend, legend_height, pack_legend
from stackchart.model import Bar, BarPart, LegendItem, Rect
from stackchart.scales import AxisScale, axis_maximum, axis_step_count, bars_max_value, bars_total

__all__ = [
    "AxisScale",
    "Bar",
    "BarPart",
    "ChartConfig",
    "ChartConfigError",
    "ChartDataError",
    "ChartGeometry",
    "ChartLayout",
    "DEFAULT_CONFIG",
    "LegendItem",
    "Rect",
    "aggregate_legend",
    "axis_maximum",
    "axis_step_count",
    "bars_max_value",
    "bars_total",
    "format_grouped_integer",
    "legend_height",
    "pack_legend",
    "validate_chart_config",
]
