from __future__ import annotations

import numpy as np
from PIL import Image


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def to_image(canvas: np.ndarray) -> Image.Image:
    if canvas.dtype != np.uint8 or canvas.ndim != 3 or canvas.shape[2] != 4:
        raise ValueError("canvas must be uint8 with shape (H, W, 4)")
    return Image.fromarray(np.ascontiguousarray(canvas))


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    _blend(dst[y : y + 1, x], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    for yy in _band(y, width):
        if yy < 0 or yy >= dst.shape[0]:
            continue
        xa = max(0, min(x0, x1))
        xb = min(dst.shape[1] - 1, max(x0, x1))
        if xa > xb:
            continue
        _blend(dst[yy, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    for xx in _band(x, width):
        if xx < 0 or xx >= dst.shape[1]:
            continue
        ya = max(0, min(y0, y1))
        yb = min(dst.shape[0] - 1, max(y0, y1))
        if ya > yb:
            continue
        _blend(dst[ya : yb + 1, xx], color)


def _band(center: int, width: int) -> range:
    start = center - (max(1, width) - 1) // 2
    return range(start, start + max(1, width))


def _blend(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    if a <= 0:
        return
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255
