from __future__ import annotations

import unittest

import numpy as np

from sheetplot.axis_config import (
    GRID_10MM_COLOR,
    GRID_50MM_COLOR,
    TRANSPARENT,
    GridLineStyle,
    axis_title,
    build_axis_config,
    grid_line_style,
    make_grid_styler,
    resolve_tick_step,
)
from sheetplot.errors import SheetConfigError
from sheetplot.scales import AxisMap
from sheetplot.ticks import format_mm, format_tick_label, make_tick_formatter


def _x_axis() -> AxisMap:
    return AxisMap(vmin=0.0, vmax=100.0, margin_mm=10.0, sheet_mm=180.0)


class TickLabelTests(unittest.TestCase):
    def test_labels_for_reference_layout(self) -> None:
        fmt = make_tick_formatter(_x_axis(), 0)
        self.assertEqual(fmt(10.0), "0 | 10")
        self.assertEqual(fmt(0.0), "-6.2500 | 0(mm)")
        self.assertEqual(fmt(20.0), "6.2500 | 20")
        self.assertEqual(fmt(170.0), "100 | 170")

    def test_common_exponent_scales_value(self) -> None:
        self.assertEqual(format_tick_label(10.0, 1500.0, 3), "1.5000 | 10")
        self.assertEqual(format_tick_label(0.0, 0.0025, -3), "2.5000 | 0(mm)")

    def test_mm_rounding(self) -> None:
        self.assertEqual(format_mm(12.25), "12.3")
        self.assertEqual(format_mm(12.5), "12.5")
        self.assertEqual(format_mm(36.0), "36")
        self.assertEqual(format_mm(-0.04), "0(mm)")
        self.assertEqual(format_mm(0.04), "0(mm)")

    def test_mm_beyond_decimal_precision(self) -> None:
        self.assertEqual(format_mm(1e30), f"{1e30:.0f}")
        self.assertEqual(format_mm(float("inf")), "inf")

    def test_common_exponent_below_float_range(self) -> None:
        self.assertEqual(format_tick_label(10.0, 5e-324, -324), "4.9407 | 10")


class GridStyleTests(unittest.TestCase):
    def test_opacity_tiers(self) -> None:
        self.assertEqual(grid_line_style(100.0, True), GridLineStyle(GRID_50MM_COLOR, 2))
        self.assertEqual(grid_line_style(0.0, True), GridLineStyle(GRID_50MM_COLOR, 2))
        self.assertEqual(grid_line_style(30.0, True), GridLineStyle(GRID_10MM_COLOR, 1))
        self.assertEqual(grid_line_style(35.0, True), GridLineStyle(TRANSPARENT, 0))

    def test_hidden_grid_is_transparent(self) -> None:
        styler = make_grid_styler(False)
        self.assertEqual(styler(100.0).color, TRANSPARENT)
        self.assertEqual(styler(100.0).width, 2)
        self.assertEqual(styler(30.0).color, TRANSPARENT)


class AxisConfigTests(unittest.TestCase):
    def test_all_mode_uses_10mm_cadence(self) -> None:
        cfg = build_axis_config("x", _x_axis(), mode="all")
        self.assertEqual((cfg.min, cfg.max, cfg.tick_step), (0.0, 180.0, 10.0))
        self.assertTrue(cfg.tick_label_visible)
        self.assertEqual(cfg.title_text, "X Parameter")
        positions = cfg.tick_positions()
        self.assertEqual(positions.size, 19)
        self.assertEqual(float(positions[-1]), 180.0)
        self.assertEqual(cfg.tick_labels()[1], "0 | 10")

    def test_interval_mode_divides_sheet(self) -> None:
        cfg = build_axis_config("x", _x_axis(), mode="interval", tick_count=4)
        self.assertEqual(cfg.tick_step, 45.0)
        np.testing.assert_allclose(cfg.tick_positions(), [0.0, 45.0, 90.0, 135.0, 180.0])
        widths = [cfg.grid_style(v).width for v in cfg.tick_positions().tolist()]
        self.assertEqual(widths, [2, 0, 1, 0, 1])

    def test_interval_mode_clamps_tick_count(self) -> None:
        self.assertEqual(resolve_tick_step(180.0, "interval", 0), (180.0, True))

    def test_none_mode_hides_labels(self) -> None:
        cfg = build_axis_config("y", AxisMap(0.0, 200.0, 10.0, 250.0), mode="none")
        self.assertFalse(cfg.tick_label_visible)
        self.assertEqual(cfg.tick_labels(), [])
        self.assertEqual(cfg.tick_step, 10.0)

    def test_unknown_mode_rejected(self) -> None:
        with self.assertRaises(SheetConfigError):
            resolve_tick_step(180.0, "sometimes", 5)  # type: ignore[arg-type]

    def test_titles_carry_common_exponent(self) -> None:
        self.assertEqual(axis_title("x", 3), "X Parameter / 10^3")
        self.assertEqual(axis_title("y", -3), "Y Parameter * 10^3")
        cfg = build_axis_config("x", AxisMap(0.0, 5000.0, 10.0, 180.0))
        self.assertEqual(cfg.common_exponent, 3)
        self.assertEqual(cfg.title_text, "X Parameter / 10^3")


if __name__ == "__main__":
    unittest.main()
