from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Literal

from sheetplot.config import SheetSize, SqueezeMargins
from sheetplot.formatting import to_fixed
from sheetplot.points import DataPoint, points_to_arrays
from sheetplot.scales import Ranges, SheetTransform

LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
AXIS_LINE_COLOR: RGBA = (255, 255, 255, 128)


@dataclass(frozen=True)
class MappedPoint:
    x_mm: float
    y_mm: float
    data_x: float
    data_y: float


@dataclass(frozen=True)
class AxisLine:
    """Dashed reference line where one data axis crosses zero.

    A ``vertical`` line marks x = 0 (the data y axis) and spans the sheet
    height; a ``horizontal`` line marks y = 0 and spans the sheet width.
    """

    orientation: Literal["vertical", "horizontal"]
    position_mm: float
    start: tuple[float, float]
    end: tuple[float, float]
    label: str
    color: RGBA = AXIS_LINE_COLOR
    width: int = 2
    dash: tuple[int, int] = (5, 5)


@dataclass(frozen=True)
class MappingResult:
    mapped_points: list[MappedPoint] = field(default_factory=list)
    axis_lines: list[AxisLine] = field(default_factory=list)


def map_points_to_physical(
    points: Sequence[DataPoint],
    ranges: Ranges,
    sheet: SheetSize,
    margins: SqueezeMargins,
) -> MappingResult:
    return map_with_transform(points, SheetTransform.build(ranges, sheet, margins))


def map_with_transform(points: Sequence[DataPoint], transform: SheetTransform) -> MappingResult:
    if len(points) == 0:
        return MappingResult()

    xs, ys = points_to_arrays(points)
    px = transform.x.to_physical(xs)
    py = transform.y.to_physical(ys)
    mapped = [
        MappedPoint(x_mm=float(mx), y_mm=float(my), data_x=p.x, data_y=p.y)
        for mx, my, p in zip(px.tolist(), py.tolist(), points, strict=True)
    ]

    sheet_w = transform.x.sheet_mm
    sheet_h = transform.y.sheet_mm
    lines: list[AxisLine] = []
    if transform.x.contains_zero:
        x0 = float(transform.x.to_physical(0.0))
        lines.append(
            AxisLine(
                orientation="vertical",
                position_mm=x0,
                start=(x0, 0.0),
                end=(x0, sheet_h),
                label=f"y axis ({to_fixed(x0, 1)}mm)",
            )
        )
    if transform.y.contains_zero:
        y0 = float(transform.y.to_physical(0.0))
        lines.append(
            AxisLine(
                orientation="horizontal",
                position_mm=y0,
                start=(0.0, y0),
                end=(sheet_w, y0),
                label=f"x axis ({to_fixed(y0, 1)}mm)",
            )
        )
    LOGGER.debug("mapped %d points, %d axis lines", len(mapped), len(lines))
    return MappingResult(mapped_points=mapped, axis_lines=lines)
