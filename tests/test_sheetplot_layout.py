from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from sheetplot.cli import main
from sheetplot.config import SheetConfig, SqueezeMargins
from sheetplot.errors import PlotDataError
from sheetplot.layout import LayoutBuilder, build_layout
from sheetplot.preview import POINT_COLOR, render_preview, save_preview
from sheetplot.scales import DEFAULT_RANGES, Ranges

ROWS = [("0", "0"), ("100", "200")]


class LayoutTests(unittest.TestCase):
    def test_reference_layout(self) -> None:
        layout = build_layout(ROWS)
        self.assertEqual(layout.ranges, Ranges(0.0, 100.0, 0.0, 200.0))
        self.assertEqual(layout.transform.units_per_mm.x, 0.625)
        self.assertEqual(len(layout.mapping.axis_lines), 2)
        self.assertEqual(layout.x_axis.tick_formatter(10.0), "0 | 10")
        self.assertEqual(layout.scale_lines()["x"], "1mm → 625*10^-3")
        self.assertEqual(layout.scale_lines()["x_tick_at_0mm"], "-6.2500")

    def test_summary(self) -> None:
        layout = build_layout(ROWS + [("", "")])
        self.assertEqual(
            layout.summary(),
            {
                "point_count": 2,
                "row_count": 3,
                "sheet_size": {"x": 180.0, "y": 250.0},
                "squeeze": {"x": 10.0, "y": 10.0},
                "drawing_area": {"x": 160.0, "y": 230.0},
            },
        )

    def test_empty_rows(self) -> None:
        layout = build_layout([("", "")])
        self.assertTrue(layout.is_empty)
        self.assertEqual(layout.ranges, DEFAULT_RANGES)
        self.assertEqual(layout.mapping.mapped_points, [])
        self.assertEqual(layout.mapping.axis_lines, [])
        self.assertEqual(layout.validate().rows[0].status, "incomplete")

    def test_builder_reuses_result_for_identical_input(self) -> None:
        builder = LayoutBuilder()
        first = builder.build(ROWS)
        self.assertIs(builder.build(list(ROWS)), first)
        self.assertEqual(builder.rebuilds, 1)
        builder.set_config(SheetConfig(margins=SqueezeMargins(20.0, 20.0)))
        second = builder.build(ROWS)
        self.assertIsNot(second, first)
        self.assertEqual(second.mapping.mapped_points[0].x_mm, 20.0)
        builder.build(ROWS + [("1", "1")])
        self.assertEqual(builder.rebuilds, 3)


    def test_subnormal_rows_still_build(self) -> None:
        layout = build_layout([("0", "0"), ("1e-321", "1")])
        self.assertEqual(layout.x_axis.common_exponent, -324)
        self.assertEqual(len(layout.x_axis.tick_labels()), 19)
        self.assertTrue(layout.scale_lines()["x"].startswith("1mm → "))
        self.assertEqual(layout.validate().total, 2)


class PreviewTests(unittest.TestCase):
    def test_render_places_points_with_y_up(self) -> None:
        canvas = render_preview(build_layout(ROWS), px_per_mm=4.0)
        self.assertEqual(canvas.shape, (1000, 720, 4))
        self.assertEqual(tuple(int(c) for c in canvas[999 - 40, 40, :3]), POINT_COLOR[:3])
        self.assertEqual(tuple(int(c) for c in canvas[999 - 960, 680, :3]), POINT_COLOR[:3])

    def test_empty_layout_refuses_to_render(self) -> None:
        with self.assertRaises(PlotDataError):
            render_preview(build_layout([]))

    def test_save_preview_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = save_preview(build_layout(ROWS), Path(td) / "sheet.png", px_per_mm=2.0)
            with Image.open(out) as img:
                self.assertEqual(img.size, (360, 500))


class CliTests(unittest.TestCase):
    def _run(self, *argv: str) -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _points_file(self, td: str) -> str:
        path = Path(td) / "points.tsv"
        path.write_text("0\t0\n100\t200\n\n5\n", encoding="utf-8")
        return str(path)

    def test_map_command(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, out, _ = self._run("map", self._points_file(td))
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["summary"]["point_count"], 2)
        self.assertEqual(payload["mapped_points"][1]["x_mm"], 170.0)
        self.assertEqual(len(payload["axis_lines"]), 2)

    def test_validate_command(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, out, _ = self._run("validate", self._points_file(td))
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["valid_points"], "2 / 3")
        self.assertEqual([r["status"] for r in payload["rows"]], ["match", "match", "incomplete"])

    def test_ticks_command_interval_mode(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, out, _ = self._run("ticks", self._points_file(td), "--tick-mode", "interval", "--tick-count-x", "4")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["x"]["tick_step"], 45.0)
        self.assertEqual(len(payload["x"]["ticks"]), 5)

    def test_bad_margin_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, _, err = self._run("map", self._points_file(td), "--margin-x", "100")
        self.assertEqual(code, 2)
        self.assertIn("margin", err)

    def test_preview_command(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "out.png"
            code, out, _ = self._run("preview", self._points_file(td), "--out", str(target), "--px-per-mm", "1")
            self.assertEqual(code, 0)
            self.assertTrue(target.exists())
        self.assertEqual(json.loads(out)["point_count"], 2)

    def test_preview_into_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "missing" / "out.png"
            code, _, err = self._run("preview", self._points_file(td), "--out", str(target))
        self.assertEqual(code, 2)
        self.assertIn("sheetplot:", err)

    def test_preview_rejects_non_positive_resolution(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "out.png"
            code, _, err = self._run("preview", self._points_file(td), "--out", str(target), "--px-per-mm", "0")
            self.assertFalse(target.exists())
        self.assertEqual(code, 2)
        self.assertIn("px_per_mm", err)


if __name__ == "__main__":
    unittest.main()
