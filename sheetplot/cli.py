from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
import sys
from typing import Any, Sequence

from sheetplot.config import TICK_LABEL_MODES, SheetConfig, SheetSize, SqueezeMargins, load_config
from sheetplot.errors import PlotDataError, SheetConfigError
from sheetplot.layout import SheetLayout, build_layout
from sheetplot.points import parse_points_text, swap_axes
from sheetplot.preview import save_preview

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sheetplot", description="Place (x, y) data on a physical sheet in millimetres.")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("map", "Print mapped millimetre positions and axis lines."),
        ("ticks", "Print tick positions and labels for both axes."),
        ("validate", "Run the forward/inverse round trip on every row."),
        ("preview", "Render a PNG preview of the sheet."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        _add_common(cmd)
        if name == "preview":
            cmd.add_argument("--out", type=Path, required=True, help="Output PNG path.")
            cmd.add_argument("--px-per-mm", type=float, default=4.0)
    return parser


def _add_common(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("points", help="Points file (tab/comma/space separated x y per line) or `-` for stdin.")
    cmd.add_argument("--config", type=Path, default=None, help="Sheet config TOML file.")
    cmd.add_argument("--width", type=float, default=None, help="Sheet width in mm.")
    cmd.add_argument("--height", type=float, default=None, help="Sheet height in mm.")
    cmd.add_argument("--margin-x", type=float, default=None, help="Squeeze margin on x in mm.")
    cmd.add_argument("--margin-y", type=float, default=None, help="Squeeze margin on y in mm.")
    cmd.add_argument("--tick-mode", choices=list(TICK_LABEL_MODES), default=None)
    cmd.add_argument("--tick-count-x", type=int, default=None)
    cmd.add_argument("--tick-count-y", type=int, default=None)
    cmd.add_argument("--no-grid", action="store_true", help="Hide 10mm/50mm grid lines.")
    cmd.add_argument("--swap-sheet", action="store_true", help="Swap sheet width and height.")
    cmd.add_argument("--swap-axes", action="store_true", help="Swap x and y of every data row.")


def resolve_config(args: argparse.Namespace) -> SheetConfig:
    base = load_config(args.config) if args.config is not None else SheetConfig()
    sheet = base.sheet
    if args.width is not None or args.height is not None:
        sheet = SheetSize(
            width_mm=args.width if args.width is not None else sheet.width_mm,
            height_mm=args.height if args.height is not None else sheet.height_mm,
        )
    if args.swap_sheet:
        sheet = sheet.swapped()
    margins = SqueezeMargins(
        x_mm=args.margin_x if args.margin_x is not None else base.margins.x_mm,
        y_mm=args.margin_y if args.margin_y is not None else base.margins.y_mm,
    )
    return base.replace(
        sheet=sheet,
        margins=margins,
        tick_label_mode=args.tick_mode or base.tick_label_mode,
        tick_count_x=args.tick_count_x if args.tick_count_x is not None else base.tick_count_x,
        tick_count_y=args.tick_count_y if args.tick_count_y is not None else base.tick_count_y,
        show_grid=base.show_grid and not args.no_grid,
    )


def read_rows(source: str) -> list[tuple[str, str]]:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    rows = parse_points_text(text)
    LOGGER.info("read %d rows from %s", len(rows), source)
    return rows


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(args)
        rows = read_rows(args.points)
    except (SheetConfigError, OSError) as exc:
        print(f"sheetplot: {exc}", file=sys.stderr)
        return 2

    if args.swap_axes:
        rows = swap_axes(rows)
    layout = build_layout(rows, config)

    if args.command == "map":
        _emit(_map_payload(layout))
        return 0
    if args.command == "ticks":
        _emit(_ticks_payload(layout))
        return 0
    if args.command == "validate":
        payload = _validate_payload(layout)
        _emit(payload)
        return 0 if payload["all_match"] else 1
    if args.command == "preview":
        try:
            out = save_preview(layout, args.out, px_per_mm=args.px_per_mm)
        except PlotDataError as exc:
            print(f"sheetplot: {exc}", file=sys.stderr)
            return 1
        except (OSError, ValueError) as exc:
            print(f"sheetplot: {exc}", file=sys.stderr)
            return 2
        _emit({"preview": str(out), **layout.summary()})
        return 0
    parser.error(f"unknown command: {args.command}")
    return 2


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _map_payload(layout: SheetLayout) -> dict[str, Any]:
    upm = layout.transform.units_per_mm
    return {
        "summary": layout.summary(),
        "ranges": asdict(layout.ranges),
        "units_per_mm": {"x": upm.x, "y": upm.y},
        "scales": layout.scale_lines(),
        "mapped_points": [asdict(p) for p in layout.mapping.mapped_points],
        "axis_lines": [
            {"label": line.label, "orientation": line.orientation, "position_mm": line.position_mm, "start": line.start, "end": line.end}
            for line in layout.mapping.axis_lines
        ],
    }


def _ticks_payload(layout: SheetLayout) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for axis in (layout.x_axis, layout.y_axis):
        positions = axis.tick_positions().tolist()
        labels = axis.tick_labels()
        out[axis.axis] = {
            "title": axis.title_text,
            "tick_step": axis.tick_step,
            "labels_visible": axis.tick_label_visible,
            "ticks": [
                {"mm": mm, "label": labels[i] if labels else None, "grid_width": axis.grid_style(mm).width}
                for i, mm in enumerate(positions)
            ],
        }
    return out


def _validate_payload(layout: SheetLayout) -> dict[str, Any]:
    report = layout.validate()
    return {
        "scale_x": report.scale_x,
        "scale_y": report.scale_y,
        "tick_at_zero_x": report.tick_at_zero_x,
        "tick_at_zero_y": report.tick_at_zero_y,
        "valid_points": f"{report.valid_count} / {report.total}",
        "all_match": report.all_match,
        "rows": [
            {
                "index": row.index + 1,
                "x": row.raw_x,
                "y": row.raw_y,
                "reverse_x": row.reverse_x_text,
                "reverse_y": row.reverse_y_text,
                "status": row.status,
            }
            for row in report.rows
        ],
    }
