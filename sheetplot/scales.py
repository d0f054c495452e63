from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import TypeVar

import numpy as np

from sheetplot.config import SheetSize, SqueezeMargins
from sheetplot.points import DataPoint, points_to_arrays

LOGGER = logging.getLogger(__name__)

Numeric = TypeVar("Numeric", float, np.ndarray)


@dataclass(frozen=True)
class Ranges:
    min_x: float
    max_x: float
    min_y: float
    max_y: float


DEFAULT_RANGES = Ranges(min_x=0.0, max_x=10.0, min_y=0.0, max_y=10.0)


@dataclass(frozen=True)
class UnitsPerMm:
    x: float
    y: float


def compute_ranges(points: Sequence[DataPoint]) -> Ranges:
    if len(points) == 0:
        return DEFAULT_RANGES
    xs, ys = points_to_arrays(points)
    return Ranges(
        min_x=float(np.min(xs)),
        max_x=float(np.max(xs)),
        min_y=float(np.min(ys)),
        max_y=float(np.max(ys)),
    )


def tick_value(mm_pos: Numeric, vmin: float, margin_mm: float, units_per_mm: float) -> Numeric:
    return (vmin - margin_mm * units_per_mm) + mm_pos * units_per_mm


@dataclass(frozen=True)
class AxisMap:
    """Affine map between one data axis and one sheet axis.

    ``[vmin, vmax]`` lands on ``[margin_mm, sheet_mm - margin_mm]``. A zero
    data span is treated as a span of 1. The drawing extent is not guarded:
    margins at or beyond half the sheet give an infinite or negative scale.
    """

    vmin: float
    vmax: float
    margin_mm: float
    sheet_mm: float

    @property
    def span(self) -> float:
        span = self.vmax - self.vmin
        return span if span != 0 else 1.0

    @property
    def drawing_mm(self) -> float:
        return self.sheet_mm - 2 * self.margin_mm

    @property
    def units_per_mm(self) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.divide(np.float64(self.span), np.float64(self.drawing_mm)))

    @property
    def tick_at_zero(self) -> float:
        return self.to_data(0.0)

    @property
    def contains_zero(self) -> bool:
        return self.vmin <= 0 <= self.vmax

    def to_physical(self, value: Numeric) -> Numeric:
        return (value - self.vmin) * self.drawing_mm / self.span + self.margin_mm

    def to_data(self, mm_pos: Numeric) -> Numeric:
        return tick_value(mm_pos, self.vmin, self.margin_mm, self.units_per_mm)


@dataclass(frozen=True)
class SheetTransform:
    x: AxisMap
    y: AxisMap

    @classmethod
    def build(cls, ranges: Ranges, sheet: SheetSize, margins: SqueezeMargins) -> "SheetTransform":
        transform = cls(
            x=AxisMap(vmin=ranges.min_x, vmax=ranges.max_x, margin_mm=margins.x_mm, sheet_mm=sheet.width_mm),
            y=AxisMap(vmin=ranges.min_y, vmax=ranges.max_y, margin_mm=margins.y_mm, sheet_mm=sheet.height_mm),
        )
        for name, axis in (("x", transform.x), ("y", transform.y)):
            if axis.drawing_mm <= 0:
                LOGGER.warning(
                    "%s drawing extent is %.3fmm (sheet %.3fmm, margin %.3fmm); scale is degenerate",
                    name,
                    axis.drawing_mm,
                    axis.sheet_mm,
                    axis.margin_mm,
                )
        return transform

    @property
    def ranges(self) -> Ranges:
        return Ranges(min_x=self.x.vmin, max_x=self.x.vmax, min_y=self.y.vmin, max_y=self.y.vmax)

    @property
    def units_per_mm(self) -> UnitsPerMm:
        return UnitsPerMm(x=self.x.units_per_mm, y=self.y.units_per_mm)

    @property
    def tick_at_zero(self) -> tuple[float, float]:
        return (self.x.tick_at_zero, self.y.tick_at_zero)


def compute_units_per_mm(ranges: Ranges, sheet: SheetSize, margins: SqueezeMargins) -> UnitsPerMm:
    return SheetTransform.build(ranges, sheet, margins).units_per_mm
