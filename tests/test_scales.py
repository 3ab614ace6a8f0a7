from __future__ import annotations

import unittest

from stackchart.model import Bar, BarPart
from stackchart.scales import (
    AxisScale,
    axis_maximum,
    axis_step_count,
    bars_max_value,
    bars_total,
    compute_axis_scale,
)


def _bar(*values: float | None, title: str = "bar") -> Bar:
    return Bar(title=title, parts=tuple(BarPart(value=v, color="#000000", title=f"p{i}") for i, v in enumerate(values)))


class AxisMaximumTests(unittest.TestCase):
    def test_zero_maps_to_ten(self) -> None:
        self.assertEqual(axis_maximum(0), 10)

    def test_rounds_up_with_five_unit_below_fifty(self) -> None:
        self.assertEqual(axis_maximum(37), 40)

    def test_small_values_are_kept(self) -> None:
        for value in range(1, 10):
            self.assertEqual(axis_maximum(value), value)

    def test_ladder_boundaries(self) -> None:
        self.assertEqual(axis_maximum(10), 10)
        self.assertEqual(axis_maximum(11), 12)
        self.assertEqual(axis_maximum(21), 25)
        self.assertEqual(axis_maximum(99), 100)
        self.assertEqual(axis_maximum(101), 120)
        self.assertEqual(axis_maximum(12_345), 14_000)
        self.assertEqual(axis_maximum(4_999_999), 5_000_000)

    def test_values_past_last_threshold_are_returned_unchanged(self) -> None:
        self.assertEqual(axis_maximum(5_000_000), 5_000_000)
        self.assertEqual(axis_maximum(12_345_678), 12_345_678)

    def test_result_is_close_upper_bound(self) -> None:
        for value in range(0, 20_000):
            result = axis_maximum(value)
            self.assertGreaterEqual(result, value)
            if value >= 10:
                self.assertLessEqual(result, value * 1.25)


class AxisStepCountTests(unittest.TestCase):
    def test_prefers_largest_divisor(self) -> None:
        self.assertEqual(axis_step_count(10), 10)
        self.assertEqual(axis_step_count(40), 10)
        self.assertEqual(axis_step_count(45), 9)
        self.assertEqual(axis_step_count(12), 6)
        self.assertEqual(axis_step_count(35), 7)
        self.assertEqual(axis_step_count(25), 5)
        self.assertEqual(axis_step_count(3), 3)

    def test_defaults_to_ten_without_divisor(self) -> None:
        self.assertEqual(axis_step_count(1), 10)
        self.assertEqual(axis_step_count(11), 10)

    def test_step_count_divides_axis_maximum_when_possible(self) -> None:
        for value in range(0, 5_000):
            maximum = axis_maximum(value)
            count = axis_step_count(maximum)
            if any(maximum % d == 0 for d in range(2, 11)):
                self.assertEqual(maximum % count, 0)
            else:
                self.assertEqual(count, 10)


class BarsMaxValueTests(unittest.TestCase):
    def test_empty_bars_have_no_data(self) -> None:
        self.assertIsNone(bars_max_value([]))
        self.assertIsNone(compute_axis_scale([]))

    def test_max_total_is_rounded_up(self) -> None:
        bars = [_bar(1.2, 2.3), _bar(0.5)]
        self.assertAlmostEqual(bars_total(bars[0]), 3.5)
        self.assertEqual(bars_max_value(bars), 4)

    def test_missing_values_count_as_zero(self) -> None:
        self.assertEqual(bars_max_value([_bar(None, None)]), 0)

    def test_bar_without_parts_contributes_zero(self) -> None:
        self.assertEqual(bars_total(Bar(title="empty")), 0.0)
        self.assertEqual(bars_max_value([Bar(title="empty"), _bar(3.0)]), 3)

    def test_compute_axis_scale(self) -> None:
        scale = compute_axis_scale([_bar(10, 20, 7)])
        self.assertEqual(scale, AxisScale(bars_max_value=37, maximum=40, step_count=10))
        assert scale is not None
        self.assertEqual(scale.step_value, 4)

    def test_zero_total_scale(self) -> None:
        scale = compute_axis_scale([_bar(0.0)])
        self.assertEqual(scale, AxisScale(bars_max_value=0, maximum=10, step_count=10))


if __name__ == "__main__":
    unittest.main()
