from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

import numpy as np

from sheetplot.config import TICK_LABEL_MODES, TickLabelMode
from sheetplot.errors import SheetConfigError
from sheetplot.formatting import common_exponent
from sheetplot.scales import AxisMap
from sheetplot.ticks import TickFormatter, make_tick_formatter

RGBA = tuple[int, int, int, int]
AxisName = Literal["x", "y"]

DEFAULT_TICK_STEP_MM = 10.0
TRANSPARENT: RGBA = (0, 0, 0, 0)
GRID_50MM_COLOR: RGBA = (149, 150, 206, 51)
GRID_10MM_COLOR: RGBA = (185, 186, 222, 26)
TICK_MARK_COLOR: RGBA = (121, 120, 155, 74)

_AXIS_TITLES = {"x": "X Parameter", "y": "Y Parameter"}


@dataclass(frozen=True)
class GridLineStyle:
    color: RGBA
    width: int


GridStyler = Callable[[float], GridLineStyle]


def grid_line_style(value: float, show_markers: bool) -> GridLineStyle:
    # Width follows the 10/50mm cadence even when the lines are hidden.
    if value % 50 == 0:
        return GridLineStyle(color=GRID_50MM_COLOR if show_markers else TRANSPARENT, width=2)
    if value % 10 == 0:
        return GridLineStyle(color=GRID_10MM_COLOR if show_markers else TRANSPARENT, width=1)
    return GridLineStyle(color=TRANSPARENT, width=0)


def make_grid_styler(show_markers: bool) -> GridStyler:
    def _style(value: float) -> GridLineStyle:
        return grid_line_style(float(value), show_markers)

    return _style


def axis_title(axis: AxisName, exponent: int) -> str:
    title = _AXIS_TITLES[axis]
    if exponent > 0:
        return f"{title} / 10^{exponent}"
    if exponent < 0:
        return f"{title} * 10^{-exponent}"
    return title


def resolve_tick_step(extent_mm: float, mode: TickLabelMode, tick_count: int) -> tuple[float, bool]:
    if mode not in TICK_LABEL_MODES:
        raise SheetConfigError(f"unknown tick label mode: {mode!r}")
    if mode == "none":
        return DEFAULT_TICK_STEP_MM, False
    if mode == "interval":
        return extent_mm / max(1, int(tick_count)), True
    return DEFAULT_TICK_STEP_MM, True


@dataclass(frozen=True)
class AxisConfig:
    axis: AxisName
    min: float
    max: float
    tick_step: float
    tick_label_visible: bool
    title_text: str
    common_exponent: int
    tick_formatter: TickFormatter
    grid_style: GridStyler
    tick_color: RGBA = TICK_MARK_COLOR

    def tick_positions(self) -> np.ndarray:
        if self.tick_step <= 0 or self.max < self.min:
            return np.asarray([], dtype=np.float64)
        count = int(np.floor((self.max - self.min) / self.tick_step + 1e-9))
        ticks = self.min + np.arange(count + 1, dtype=np.float64) * self.tick_step
        ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=self.tick_step * 1e-9)] = 0.0
        return ticks

    def tick_labels(self) -> list[str]:
        if not self.tick_label_visible:
            return []
        return [self.tick_formatter(float(v)) for v in self.tick_positions()]


def build_axis_config(
    axis: AxisName,
    axis_map: AxisMap,
    *,
    mode: TickLabelMode = "all",
    tick_count: int = 5,
    show_grid: bool = True,
) -> AxisConfig:
    exponent = common_exponent(axis_map.vmin, axis_map.vmax)
    step, visible = resolve_tick_step(axis_map.sheet_mm, mode, tick_count)
    return AxisConfig(
        axis=axis,
        min=0.0,
        max=axis_map.sheet_mm,
        tick_step=step,
        tick_label_visible=visible,
        title_text=axis_title(axis, exponent),
        common_exponent=exponent,
        tick_formatter=make_tick_formatter(axis_map, exponent),
        grid_style=make_grid_styler(show_grid),
    )
