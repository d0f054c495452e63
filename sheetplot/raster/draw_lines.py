from __future__ import annotations

import numpy as np

from sheetplot.raster.canvas import RGBA, draw_hline, draw_vline


def draw_dashed_hline(
    dst: np.ndarray,
    x0: int,
    x1: int,
    y: int,
    color: RGBA,
    *,
    width: int = 1,
    dash: tuple[int, int] = (5, 5),
) -> None:
    for a, b in _dash_runs(min(x0, x1), max(x0, x1), dash):
        draw_hline(dst, a, b, y, color, width=width)


def draw_dashed_vline(
    dst: np.ndarray,
    x: int,
    y0: int,
    y1: int,
    color: RGBA,
    *,
    width: int = 1,
    dash: tuple[int, int] = (5, 5),
) -> None:
    for a, b in _dash_runs(min(y0, y1), max(y0, y1), dash):
        draw_vline(dst, x, a, b, color, width=width)


def _dash_runs(start: int, end: int, dash: tuple[int, int]) -> list[tuple[int, int]]:
    on, off = dash
    if on <= 0:
        return []
    if off <= 0:
        return [(start, end)]
    runs: list[tuple[int, int]] = []
    pos = start
    while pos <= end:
        runs.append((pos, min(end, pos + on - 1)))
        pos += on + off
    return runs
