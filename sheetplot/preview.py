from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from sheetplot.axis_config import AxisConfig
from sheetplot.errors import PlotDataError
from sheetplot.layout import SheetLayout
from sheetplot.raster import (
    RGBA,
    draw_dashed_hline,
    draw_dashed_vline,
    draw_hline,
    draw_markers,
    draw_vline,
    new_canvas,
    to_image,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_PX_PER_MM = 4.0
BACKGROUND: RGBA = (22, 26, 38, 255)
POINT_COLOR: RGBA = (99, 179, 237, 255)


def mm_to_pixels(
    x_mm: np.ndarray,
    y_mm: np.ndarray,
    *,
    px_per_mm: float,
    height_px: int,
) -> tuple[np.ndarray, np.ndarray]:
    px = np.rint(np.asarray(x_mm, dtype=np.float64) * px_per_mm).astype(np.int32)
    py = (height_px - 1) - np.rint(np.asarray(y_mm, dtype=np.float64) * px_per_mm).astype(np.int32)
    return px, py


def render_preview(
    layout: SheetLayout,
    *,
    px_per_mm: float = DEFAULT_PX_PER_MM,
    background: RGBA = BACKGROUND,
    point_color: RGBA = POINT_COLOR,
    marker_size: int = 5,
) -> np.ndarray:
    if layout.is_empty:
        raise PlotDataError("no valid data points to render")
    if px_per_mm <= 0:
        raise ValueError("px_per_mm must be > 0")

    sheet = layout.config.sheet
    width_px = max(1, int(round(sheet.width_mm * px_per_mm)))
    height_px = max(1, int(round(sheet.height_mm * px_per_mm)))
    canvas = new_canvas(width_px, height_px, color=background)

    _draw_grid(canvas, layout.x_axis, px_per_mm=px_per_mm, height_px=height_px)
    _draw_grid(canvas, layout.y_axis, px_per_mm=px_per_mm, height_px=height_px)

    for line in layout.mapping.axis_lines:
        (sx, sy), (ex, ey) = line.start, line.end
        xs, ys = mm_to_pixels(np.asarray([sx, ex]), np.asarray([sy, ey]), px_per_mm=px_per_mm, height_px=height_px)
        if line.orientation == "vertical":
            draw_dashed_vline(canvas, int(xs[0]), int(ys[0]), int(ys[1]), line.color, width=line.width, dash=line.dash)
        else:
            draw_dashed_hline(canvas, int(xs[0]), int(xs[1]), int(ys[0]), line.color, width=line.width, dash=line.dash)

    points = layout.mapping.mapped_points
    px, py = mm_to_pixels(
        np.asarray([p.x_mm for p in points]),
        np.asarray([p.y_mm for p in points]),
        px_per_mm=px_per_mm,
        height_px=height_px,
    )
    draw_markers(canvas, px, py, point_color, size=marker_size)
    LOGGER.debug("rendered %dx%d preview with %d points", width_px, height_px, len(points))
    return canvas


def save_preview(layout: SheetLayout, path: str | Path, **kwargs: object) -> Path:
    out = Path(path)
    canvas = render_preview(layout, **kwargs)  # type: ignore[arg-type]
    to_image(canvas).save(out)
    LOGGER.info("wrote preview to %s", out)
    return out


def _draw_grid(canvas: np.ndarray, axis: AxisConfig, *, px_per_mm: float, height_px: int) -> None:
    width_px = canvas.shape[1]
    for value in axis.tick_positions().tolist():
        style = axis.grid_style(value)
        if style.width <= 0 or style.color[3] == 0:
            continue
        if axis.axis == "x":
            px, _ = mm_to_pixels(np.asarray([value]), np.asarray([0.0]), px_per_mm=px_per_mm, height_px=height_px)
            draw_vline(canvas, int(px[0]), 0, height_px - 1, style.color, width=style.width)
        else:
            _, py = mm_to_pixels(np.asarray([0.0]), np.asarray([value]), px_per_mm=px_per_mm, height_px=height_px)
            draw_hline(canvas, 0, width_px - 1, int(py[0]), style.color, width=style.width)
