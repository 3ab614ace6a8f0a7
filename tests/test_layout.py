from __future__ import annotations

import unittest
from unittest import mock

from stackchart import legend as legend_module
from stackchart.config import ChartConfig
from stackchart.errors import ChartConfigError, ChartDataError
from stackchart.layout import ChartGeometry, ChartLayout
from stackchart.model import Bar, BarPart, LegendItem, Rect


def _sample_bars() -> list[Bar]:
    return [
        Bar(title="Data 1", parts=(BarPart(10, "red", "A"), BarPart(20, "blue", "B"))),
        Bar(title="Data 2", parts=(BarPart(5, "green", "A"), BarPart(2, "yellow", "C"))),
    ]


class ChartLayoutTests(unittest.TestCase):
    def test_empty_chart(self) -> None:
        layout = ChartLayout(400, 300)
        geometry = layout.set_data([])
        self.assertTrue(geometry.is_empty)
        self.assertEqual(geometry.legend_height, 0.0)
        self.assertEqual(geometry.legend.cells, ())
        self.assertEqual(geometry.content.bars, ())
        self.assertEqual(geometry.y_axis.ticks, ())
        self.assertEqual(geometry.y_axis.gridlines, ())
        self.assertEqual(geometry.x_axis.labels, ())
        self.assertEqual(geometry.content.rect, Rect(80.0, 0.0, 320.0, 260.0))
        self.assertEqual(geometry.legend.rect, Rect(40.0, 300.0, 360.0, 0.0))

    def test_zero_total_bar_shows_zero_to_ten(self) -> None:
        layout = ChartLayout(400, 300)
        geometry = layout.set_data([Bar.single("zero", BarPart(None, "red", "A"))])
        assert geometry.scale is not None
        self.assertEqual(geometry.scale.maximum, 10)
        self.assertEqual(geometry.scale.step_count, 10)
        self.assertEqual([t.value for t in geometry.y_axis.ticks], list(range(11)))
        self.assertEqual([t.text for t in geometry.y_axis.ticks], [str(v) for v in range(11)])

    def test_full_pass(self) -> None:
        layout = ChartLayout(400, 300)
        geometry = layout.set_data(_sample_bars())
        self.assertEqual(
            geometry.legend_items,
            (LegendItem("red", "A"), LegendItem("blue", "B"), LegendItem("yellow", "C")),
        )
        self.assertEqual(geometry.legend_height, 44.0)
        self.assertEqual(geometry.content.rect, Rect(80.0, 0.0, 320.0, 216.0))
        self.assertEqual(geometry.x_axis.rect, Rect(80.0, 216.0, 320.0, 40.0))
        self.assertEqual(geometry.legend.rect, Rect(40.0, 256.0, 360.0, 44.0))
        assert geometry.scale is not None
        self.assertEqual((geometry.scale.maximum, geometry.scale.step_count), (30, 10))
        self.assertEqual([label.text for label in geometry.x_axis.labels], ["Data 1", "Data 2"])
        self.assertEqual(len(geometry.content.segments), 4)
        self.assertAlmostEqual(geometry.content.bars[0].segments[-1].rect.y, 0.0)
        self.assertEqual(geometry.legend.cells[2].rect, Rect(240.0, 20.0, 120.0, 24.0))

    def test_grouped_tick_labels(self) -> None:
        layout = ChartLayout(400, 300)
        geometry = layout.set_data([Bar.single("big", BarPart(12_345, "red", "A"))])
        assert geometry.scale is not None
        self.assertEqual(geometry.scale.maximum, 14_000)
        self.assertEqual(geometry.y_axis.ticks[-1].text, "14,000")
        self.assertEqual(geometry.y_axis.ticks[1].text, "1,400")

    def test_custom_formatter(self) -> None:
        layout = ChartLayout(400, 300, formatter=lambda v: f"{v:.0f} kWh")
        geometry = layout.set_data(_sample_bars())
        self.assertEqual(geometry.y_axis.ticks[-1].text, "30 kWh")
        geometry = layout.set_formatter(lambda v: f"<{v:g}>")
        self.assertEqual(geometry.y_axis.ticks[-1].text, "<30>")

    def test_bounds_change_keeps_legend_items(self) -> None:
        layout = ChartLayout(400, 300)
        with mock.patch("stackchart.layout.aggregate_legend", wraps=legend_module.aggregate_legend) as spy:
            first = layout.set_data(_sample_bars())
            second = layout.set_bounds(700, 500)
        self.assertEqual(spy.call_count, 1)
        self.assertEqual(first.legend_items, second.legend_items)
        self.assertEqual(second.legend.rect, Rect(40.0, 456.0, 660.0, 44.0))
        self.assertEqual(second.legend.cells[1].rect.x, 220.0)
        self.assertEqual(second.content.rect.height, 416.0)

    def test_config_changes_relayout(self) -> None:
        layout = ChartLayout(400, 300)
        layout.set_data(_sample_bars())
        geometry = layout.set_config(axis_y_lines_hidden=True, axis_x_lines_hidden=True, axis_y_width=60)
        self.assertEqual(geometry.y_axis.gridlines, ())
        self.assertEqual(geometry.x_axis.gridlines, ())
        self.assertEqual(geometry.content.rect.x, 60.0)
        self.assertTrue(layout.config.axis_y_lines_hidden)

        geometry = layout.set_config(ChartConfig(legend_columns=2))
        self.assertEqual(geometry.legend_height, 68.0)
        self.assertFalse(layout.config.axis_y_lines_hidden)

    def test_invalid_config_is_rejected(self) -> None:
        layout = ChartLayout(400, 300)
        with self.assertRaises(ChartConfigError):
            layout.set_config(bogus=1)
        with self.assertRaises(ChartConfigError):
            layout.set_config({"axis_y_width": 10})  # type: ignore[arg-type]

    def test_set_data_rejects_non_bars(self) -> None:
        layout = ChartLayout(400, 300)
        with self.assertRaises(ChartDataError):
            layout.set_data([{"title": "raw"}])  # type: ignore[list-item]

    def test_listeners_receive_each_pass(self) -> None:
        layout = ChartLayout(400, 300)
        seen: list[ChartGeometry] = []
        layout.add_listener(seen.append)
        layout.set_data(_sample_bars())
        layout.set_bounds(500, 300)
        self.assertEqual([g.bounds.width for g in seen], [400.0, 500.0])
        layout.remove_listener(seen.append)
        layout.set_bounds(600, 300)
        self.assertEqual(len(seen), 2)

    def test_change_from_listener_is_deferred(self) -> None:
        layout = ChartLayout(400, 300)
        widths: list[float] = []

        def listener(geometry: ChartGeometry) -> None:
            widths.append(geometry.bounds.width)
            if len(widths) == 1:
                returned = layout.set_bounds(500, 300)
                # The running pass is not interrupted.
                self.assertEqual(returned.bounds.width, 400.0)

        layout.add_listener(listener)
        passes_before = layout.pass_count
        layout.set_data(_sample_bars())
        self.assertEqual(widths, [400.0, 500.0])
        self.assertEqual(layout.pass_count, passes_before + 2)
        self.assertEqual(layout.geometry.bounds.width, 500.0)

    def test_pass_is_logged(self) -> None:
        layout = ChartLayout(400, 300)
        with self.assertLogs("stackchart.layout", level="DEBUG") as logs:
            layout.set_data(_sample_bars())
        self.assertTrue(any("axis_max=30" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
